from django.urls import path, include
from django.views.generic import RedirectView
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework.permissions import AllowAny

from admin_site import admin_site

schema_view = get_schema_view(
    openapi.Info(
        title="Tutor Match API",
        default_version='v1',
        description="API docs for Tutor Match.\n\n"
                    "<a href='/admin/' target='_blank'>➡️ Go to Django Admin</a>",
    ),
    public=True,
    permission_classes=[AllowAny],
)

urlpatterns = [
    path('admin/', admin_site.urls),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('api/auth/', include('apps.auth_app.urls')),
    path('api/', include('apps.profile_app.urls')),
    path('api/posts/', include('apps.post_app.urls')),
    path('api/', include('apps.request_app.urls')),

    path('', RedirectView.as_view(url='/swagger/', permanent=False)),
]
