# mind_core/users/api/auth.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import serializers
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from mind_core.audit.mixins import AuditMixin
from mind_core.audit.models import AuditAction, AuditDomain
from mind_core.audit.services import snapshot
from mind_core.common.api.responses import envelope
from mind_core.common.config import get_config
from mind_core.common.throttling import AuthRateThrottle
from mind_core.users.api.serializers import (
    AuthTokenSerializer,
    ChangePasswordSerializer,
    LoginSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    SendVerificationSerializer,
    UserSerializer,
    VerificationSentSerializer,
    VerifyCodeSerializer,
)
from mind_core.users.exceptions import Unauthorized
from mind_core.users.models import User
from mind_core.users.services import AuthService


def _account(request) -> User:
    # JWT_DISABLED injects a principal with no stored account behind it
    if not isinstance(request.user, User):
        raise Unauthorized("This endpoint requires a registered account.")
    return request.user


def _auth_payload(result) -> dict:
    return AuthTokenSerializer({"user": result.user, "token": result.token}).data


class UserAuditAPIView(AuditMixin, APIView):
    audit_domain = AuditDomain.USERS
    audit_entity = "User"


class PublicAuthView(UserAuditAPIView):
    """
    Credential endpoints: no authentication, tighter per-IP throttle.
    """
    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_classes = [AuthRateThrottle]


class RegisterView(PublicAuthView):
    @extend_schema(request=RegisterSerializer, responses={201: AuthTokenSerializer}, tags=["Auth"])
    def post(self, request):
        ser = RegisterSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        result = AuthService.register(
            person=dict(ser.validated_data["person"]),
            user=dict(ser.validated_data["user"]),
        )
        self.audit(
            AuditAction.CREATE,
            result.user,
            after=snapshot(result.user),
            extra={"person": snapshot(result.user.person)},
            actor=result.user.id,
        )
        return envelope(_auth_payload(result), message="User registered", status=201)


class LoginView(PublicAuthView):
    @extend_schema(request=LoginSerializer, responses={200: AuthTokenSerializer}, tags=["Auth"])
    def post(self, request):
        ser = LoginSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        result = AuthService.login(**ser.validated_data)
        self.audit(
            AuditAction.LOGIN,
            result.user,
            after={"last_access_at": snapshot(result.user)["last_access_at"]},
            actor=result.user.id,
        )
        return envelope(_auth_payload(result), message="Login successful")


class SendVerificationView(PublicAuthView):
    @extend_schema(request=SendVerificationSerializer, responses={200: VerificationSentSerializer}, tags=["Auth"])
    def post(self, request):
        ser = SendVerificationSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        cfg = get_config()
        ticket = AuthService.issue_verification_code(user_id=ser.validated_data["user_id"], config=cfg)
        self.audit(
            AuditAction.UPDATE,
            ticket.user,
            after={"verification_code_sent": True, "expires_at": ticket.expires_at.isoformat()},
            actor=ticket.user.id,
        )

        data = {"user_id": ticket.user.id, "email": ticket.user.email, "expires_at": ticket.expires_at}
        if cfg.expose_verification_code:
            data["verification_code"] = ticket.code
        return envelope(VerificationSentSerializer(data).data, message="Verification code sent")


class VerifyCodeView(PublicAuthView):
    @extend_schema(request=VerifyCodeSerializer, responses={200: AuthTokenSerializer}, tags=["Auth"])
    def post(self, request):
        ser = VerifyCodeSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        result = AuthService.verify_code(**ser.validated_data)
        self.audit(
            AuditAction.UPDATE,
            result.user,
            after={"email_verified": True, "is_active": True},
            actor=result.user.id,
        )
        return envelope(_auth_payload(result), message="Verification successful")


class LogoutView(UserAuditAPIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(request=None, responses={200: None}, tags=["Auth"])
    def post(self, request):
        # tokens are stateless; logout is recorded and the client drops the token
        self.audit(AuditAction.LOGOUT, request.user)
        return envelope(message="Logout successful")


class ProfileView(UserAuditAPIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: UserSerializer}, tags=["Auth"])
    def get(self, request):
        return envelope(UserSerializer(_account(request)).data)

    @extend_schema(request=ProfileUpdateSerializer, responses={200: UserSerializer}, tags=["Auth"])
    def patch(self, request):
        user = _account(request)
        ser = ProfileUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        person_data, user_data = ser.split()

        user = self.audited(
            AuditAction.UPDATE,
            user,
            lambda: AuthService.update_profile(user=user, person_data=person_data, user_data=user_data),
        )
        return envelope(UserSerializer(user).data, message="Profile updated")

    put = patch


class ChangePasswordView(UserAuditAPIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(request=ChangePasswordSerializer, responses={200: None}, tags=["Auth"])
    def patch(self, request):
        user = _account(request)
        ser = ChangePasswordSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        AuthService.change_password(user=user, **ser.validated_data)
        self.audit(AuditAction.UPDATE, user, after={"password_changed": True})
        return envelope(message="Password changed")

    put = patch


class PrincipalSerializer(serializers.Serializer):
    id = serializers.CharField()
    email = serializers.EmailField()
    account_status = serializers.CharField(allow_null=True)
    authenticated_via = serializers.CharField()


class MeView(APIView):
    """
    Who the current credential belongs to. Works with the JWT_DISABLED stand-in.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: PrincipalSerializer}, tags=["Auth"])
    def get(self, request):
        user = request.user
        data = {
            "id": str(user.id),
            "email": user.email,
            "account_status": getattr(user, "account_status", None),
            "authenticated_via": "token" if request.auth else "mock",
        }
        return envelope(PrincipalSerializer(data).data)
