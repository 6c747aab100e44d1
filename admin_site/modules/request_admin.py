from django.contrib import admin, messages

from apps.request_app.models import TeachRequest, RequestAlreadyDecided
from ..site import admin_site


@admin.register(TeachRequest, site=admin_site)
class TeachRequestAdmin(admin.ModelAdmin):
    list_display = ("id", "kind", "tutor_name", "student_name", "post", "subject", "status", "created_at")
    list_filter = ("kind", "status", "created_at")
    search_fields = (
        "tutor_name",
        "student_name",
        "subject",
        "tutor__email",
        "student__email",
    )
    ordering = ("-created_at",)
    readonly_fields = (
        "kind", "post", "subject", "tutor", "tutor_name",
        "student", "student_name", "status", "created_at", "updated_at",
    )
    list_per_page = 25
    actions = ["accept_requests", "reject_requests"]

    def has_add_permission(self, request):
        return False

    def _decide(self, request, queryset, status):
        count = 0
        for teach_request in queryset:
            try:
                teach_request.decide(status)
            except RequestAlreadyDecided:
                continue
            count += 1

        level = messages.SUCCESS if count else messages.WARNING
        self.message_user(request, f"{count} pending requests were marked as {status}.", level=level)

    @admin.action(description="Accept selected pending requests")
    def accept_requests(self, request, queryset):
        self._decide(request, queryset, TeachRequest.Status.ACCEPTED)

    @admin.action(description="Reject selected pending requests")
    def reject_requests(self, request, queryset):
        self._decide(request, queryset, TeachRequest.Status.REJECTED)
