# orders/views/base.py

from django.apps import apps
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from orders.services import OrderTransitionService
from orders.services.access import require_capability, require_identity
from orders.services.exceptions import OrderServiceError


class PublicWriteThrottle(AnonRateThrottle):
    """
    For public write endpoints (checkout).
    Uses REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']['public_write'].
    """

    scope = "public_write"


class PublicPollThrottle(AnonRateThrottle):
    """
    For guest order polling.
    Uses REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']['public_poll'].
    """

    scope = "public_poll"


def error_response(*, code: str, message: str, http_status: int):
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )


def build_notifier():
    return apps.get_app_config("notifications").build_notifier()


class OrderAPIView(APIView):
    """
    Base for order endpoints.

    Actor checks happen in the services (guests authenticate with a token,
    not a session), so the DRF layer lets every request through and maps
    OrderServiceError to the canonical error payload.
    """

    permission_classes = [AllowAny]

    # checked before the payload is validated (401/403 before 400)
    required_capability = None
    requires_identity = False

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        if self.required_capability:
            require_capability(request.user, self.required_capability)
        elif self.requires_identity:
            require_identity(request.user, guest_token_from(request, request.data))

    def transitions(self) -> OrderTransitionService:
        return OrderTransitionService(notifier=build_notifier())

    def handle_exception(self, exc):
        if isinstance(exc, OrderServiceError):
            return error_response(
                code=exc.code,
                message=exc.message,
                http_status=exc.status_code,
            )
        return super().handle_exception(exc)


def guest_token_from(request, data=None):
    """Body first, then ?guestToken= (GET / DELETE)."""
    token = data.get("guestToken") if hasattr(data, "get") else None
    token = token or request.query_params.get("guestToken")
    return str(token or "").strip() or None
