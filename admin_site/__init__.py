from admin_site.site import admin_site
from admin_site.modules import auth_admin, post_admin, request_admin  # noqa: F401 registers model admins
