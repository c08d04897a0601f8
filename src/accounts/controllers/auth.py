"""This module contains the controllers for the authentication app."""

from django.utils.translation import gettext_lazy as _
from ninja_extra import api_controller, route, status

from accounts import schema
from accounts.models import User
from accounts.service import account as account_service
from accounts.service import auth as auth_service
from common.authentication import ActiveUserJWTAuth
from common.controllers import UserAwareController
from common.schema import ResponseMessage
from common.throttling import AuthThrottle, UserRegistrationThrottle


@api_controller("/auth", tags=["Auth"], throttle=AuthThrottle())
class AuthController(UserAwareController):
    @route.post(
        "/signup",
        response={status.HTTP_201_CREATED: schema.AuthResponseSchema},
        url_name="signup",
        throttle=UserRegistrationThrottle(),
    )
    def signup(self, payload: schema.SignupSchema) -> tuple[int, schema.AuthResponseSchema]:
        """Create a new account and sign in right away.

        A verification email is sent to the given address. Returns 400 if the username or
        the email is already taken, or if the password is too weak.
        """
        user = account_service.register_user(payload)
        tokens = auth_service.get_token_pair_for_user(user)
        return status.HTTP_201_CREATED, schema.AuthResponseSchema(
            access=tokens.access, refresh=tokens.refresh, user=schema.UserSchema.from_orm(user)
        )

    @route.post("/login", response=schema.AuthResponseSchema, url_name="login")
    def login(self, payload: schema.LoginSchema) -> schema.AuthResponseSchema:
        """Authenticate with username and password to obtain JWT access/refresh tokens.

        Returns 401 on bad credentials and 403 for suspended accounts.
        """
        user, tokens = auth_service.login(payload.username, payload.password)
        return schema.AuthResponseSchema(
            access=tokens.access, refresh=tokens.refresh, user=schema.UserSchema.from_orm(user)
        )

    @route.post("/refresh", response=schema.TokenPairSchema, url_name="refresh")
    def refresh(self, payload: schema.RefreshSchema) -> schema.TokenPairSchema:
        """Exchange a refresh token for a new token pair. The old refresh token stops working."""
        return auth_service.refresh(payload.refresh)

    @route.post("/logout", response=ResponseMessage, url_name="logout")
    def logout(self, payload: schema.RefreshSchema) -> ResponseMessage:
        """Blacklist the refresh token."""
        auth_service.logout(payload.refresh)
        return ResponseMessage(message=str(_("Logged out successfully")))

    @route.get("/me", response=schema.UserSchema, url_name="me", auth=ActiveUserJWTAuth())
    def me(self) -> User:
        """Retrieve the authenticated user's account, including private fields."""
        return self.user()

    @route.post(
        "/verify-email/resend",
        response=ResponseMessage,
        url_name="resend-verification-email",
        auth=ActiveUserJWTAuth(),
        throttle=UserRegistrationThrottle(),
    )
    def resend_verification_email(self) -> ResponseMessage:
        """Send a new verification link to the caller. Returns 400 if the email is already verified."""
        account_service.resend_verification_email(self.user())
        return ResponseMessage(message=str(_("Verification email sent.")))

    @route.post("/verify-email", response=schema.AuthResponseSchema, url_name="verify-email")
    def verify_email(self, payload: schema.VerifyEmailSchema) -> schema.AuthResponseSchema:
        """Verify the email address using the token from the verification email.

        The token is single-use and expires after 24 hours. Returns the user along with
        JWT tokens for immediate login.
        """
        user = account_service.verify_email(payload.token)
        tokens = auth_service.get_token_pair_for_user(user)
        return schema.AuthResponseSchema(
            access=tokens.access, refresh=tokens.refresh, user=schema.UserSchema.from_orm(user)
        )

    @route.post("/password/reset-request", response=ResponseMessage, url_name="reset-password-request")
    def reset_password_request(self, payload: schema.EmailSchema) -> ResponseMessage:
        """Ask for a password reset link.

        Always returns the same message so that the endpoint cannot be used to find out
        which addresses are registered.
        """
        account_service.request_password_reset(payload.email)
        return ResponseMessage(
            message=str(_("If an account with that email exists, a password reset link has been sent."))
        )

    @route.post("/password/reset", response=ResponseMessage, url_name="reset-password")
    def reset_password(self, payload: schema.PasswordResetSchema) -> ResponseMessage:
        """Set a new password using the token from the reset email. The token is single-use."""
        account_service.reset_password(payload.token, payload.password)
        return ResponseMessage(message=str(_("Password reset successfully.")))
