from django.shortcuts import redirect
from django.urls import reverse


def my_profile_redirect(request):
    if request.user.is_authenticated:
        url = reverse('tutor_admin:auth_app_user_change', args=[request.user.id])
        return redirect(url)
    return redirect('tutor_admin:index')
