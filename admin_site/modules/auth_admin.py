from django import forms
from django.contrib import admin, messages
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.forms import BaseUserCreationForm, UserChangeForm as BaseUserChangeForm

from apps.auth_app.models import User
from apps.auth_app.validators import normalize_subjects
from ..site import admin_site


class UserCreationForm(BaseUserCreationForm):
    class Meta:
        model = User
        fields = ('email', 'name', 'role')


class UserChangeForm(BaseUserChangeForm):
    class Meta:
        model = User
        fields = '__all__'

    def clean_subjects(self):
        try:
            return normalize_subjects(self.cleaned_data.get('subjects'))
        except ValueError as e:
            raise forms.ValidationError(str(e))


@admin.register(User, site=admin_site)
class UserAdmin(BaseUserAdmin):
    form = UserChangeForm
    add_form = UserCreationForm

    list_display = ('email', 'name', 'role', 'is_staff', 'is_superuser', 'created_at')
    list_filter = ('role', 'is_staff', 'is_superuser', 'is_active')
    search_fields = ('email', 'name')
    ordering = ('email',)

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Personal Info', {'fields': ('name', 'role', 'subjects')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Important Dates', {'fields': ('last_login', 'date_joined', 'created_at')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'name', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = ('last_login', 'date_joined', 'created_at')

    actions = ['make_student', 'make_tutor']

    def _set_role(self, request, queryset, role):
        updated_count = queryset.exclude(role=role).update(role=role)
        self.message_user(
            request,
            f"{updated_count} users now have the role of {User.Role(role).label}.",
            level=messages.SUCCESS,
        )

    @admin.action(description="Make selected users tutors")
    def make_tutor(self, request, queryset):
        self._set_role(request, queryset, User.Role.TUTOR)

    @admin.action(description="Make selected users students")
    def make_student(self, request, queryset):
        self._set_role(request, queryset, User.Role.STUDENT)
