from django.urls import path

from apps.post_app.views import PostListCreateView, PostDetailView

urlpatterns = [
    path("", PostListCreateView.as_view(), name="post-list"),
    path("<str:post_id>/", PostDetailView.as_view(), name="post-detail"),
]
