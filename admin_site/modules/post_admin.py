from django.contrib import admin

from apps.post_app.models import Post
from ..site import admin_site


@admin.register(Post, site=admin_site)
class PostAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "subject", "level", "student_name", "created_at")
    list_filter = ("level", "subject", "created_at")
    search_fields = (
        "title",
        "subject",
        "description",
        "student__email",
        "student_name",
    )
    ordering = ("-created_at",)
    readonly_fields = ("student_name", "created_at", "updated_at")
    autocomplete_fields = ("student",)
    list_per_page = 25

    def save_model(self, request, obj: Post, form, change):
        if not change:
            obj.student_name = obj.student.name
        super().save_model(request, obj, form, change)
