from django.contrib.admin import AdminSite
from django.urls import path, reverse, NoReverseMatch

from admin_site.views import my_profile_redirect


class TutorMatchAdminSite(AdminSite):
    site_header = "Tutor Match"
    site_title = "Tutor Match"
    index_title = "Welcome to Tutor Match"

    def get_urls(self):
        urls = super().get_urls()
        custom_urls = [
            path('my-profile/', self.admin_view(my_profile_redirect), name='my_profile'),
        ]
        return custom_urls + urls

    def each_context(self, request):
        context = super().each_context(request)
        context['user_profile_url'] = None
        if request.user.is_authenticated:
            try:
                context['user_profile_url'] = reverse('tutor_admin:auth_app_user_change', args=[request.user.id])
            except NoReverseMatch:
                pass
        return context


admin_site = TutorMatchAdminSite(name='tutor_admin')
