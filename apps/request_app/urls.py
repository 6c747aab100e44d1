from django.urls import path

from apps.request_app.views import PostTeachRequestsView, TeachRequestsView, TeachRequestDetailView

urlpatterns = [
    path("posts/<str:post_id>/requests/", PostTeachRequestsView.as_view(), name="post-requests"),
    path("requests/", TeachRequestsView.as_view(), name="requests"),
    path("requests/<str:request_id>/", TeachRequestDetailView.as_view(), name="request-detail"),
]
