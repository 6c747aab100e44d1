from django.urls import path

from .views import ProfileView, UserUpdateView, TutorListView

urlpatterns = [
    path('users/me/', ProfileView.as_view(), name='profile'),
    path('users/<str:user_id>/', UserUpdateView.as_view(), name='user-update'),
    path('tutors/', TutorListView.as_view(), name='tutor-list'),
]
