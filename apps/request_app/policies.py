from apps.request_app.models import TeachRequest


def authorized_party_id(teach_request: TeachRequest):
    """Id of the only user allowed to accept or reject ``teach_request``."""
    if teach_request.is_post_bound:
        return teach_request.student_id
    return teach_request.tutor_id


def can_decide(teach_request: TeachRequest, user) -> bool:
    return bool(user and user.is_authenticated and user.id == authorized_party_id(teach_request))


def forbidden_message(teach_request: TeachRequest) -> str:
    if teach_request.is_post_bound:
        return "Only the student can accept or reject this request"
    return "Only the tutor can accept or reject this request"
