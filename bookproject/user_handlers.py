import logging
from fastapi.concurrency import run_in_threadpool

from bookproject import email_templates
from bookproject.crud import UserStore
from bookproject.internal_message import NotificationDispatcher
from bookproject.models import User
from bookproject.outcomes import ErrorKind, Outcome, failure, ok
from bookproject.schemas import (
    BCRYPT_MAX_PASSWORD_BYTES,
    UserToDeleteDto,
    UserToRegisterDto,
    password_fits_bcrypt,
)
from bookproject.security import PasswordEncoder
from exceptions.exceptions import NotificationDeliveryError, UserAlreadyRegisteredError

logger = logging.getLogger(__name__)

INCORRECT_PASSWORD_ERROR_MESSAGE = "The current password entered is incorrect"
USER_NOT_FOUND_ERROR_MESSAGE = "Could not find the user with ID {}"
EMAIL_TAKEN_ERROR_MESSAGE = "Email taken"
WRONG_PASSWORD_ERROR_MESSAGE = "Wrong password."
CURRENT_USER_NOT_FOUND_ERROR_MESSAGE = "User not found"
PASSWORD_TOO_LONG_ERROR_MESSAGE = (
    f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes long"
)


class UserHandlers:
    def __init__(
        self,
        user_store: UserStore,
        password_encoder: PasswordEncoder,
        dispatcher: NotificationDispatcher,
    ):
        self.user_store = user_store
        self.password_encoder = password_encoder
        self.dispatcher = dispatcher

    def list_users(self) -> Outcome:
        return ok(self.user_store.find_all())

    def get_user(self, user_id: int) -> Outcome:
        user = self.user_store.find_user_by_id(user_id)
        if user is None:
            return failure(
                ErrorKind.NOT_FOUND, USER_NOT_FOUND_ERROR_MESSAGE.format(user_id)
            )
        return ok(user)

    async def register(self, user: UserToRegisterDto) -> Outcome:
        # Creation and the welcome email are not transactional: if delivery
        # fails the account stays, but the caller still sees "Email taken".
        try:
            await run_in_threadpool(self.user_store.register, user)
            await self.dispatcher.send(
                user.username,
                email_templates.ACCOUNT_CREATED_SUBJECT,
                email_templates.account_created(
                    email_templates.username_from_email(user.username)
                ),
            )
        except UserAlreadyRegisteredError as e:
            logger.warning(f"Registration rejected: {e}")
            return failure(ErrorKind.BAD_REQUEST, EMAIL_TAKEN_ERROR_MESSAGE)
        except NotificationDeliveryError as e:
            logger.warning(f"Registered {user.username} but welcome email failed: {e}")
            return failure(ErrorKind.BAD_REQUEST, EMAIL_TAKEN_ERROR_MESSAGE)
        return ok()

    async def delete_current_user(
        self, current_user: User, user: UserToDeleteDto
    ) -> Outcome:
        if not await self._password_matches(user.password, current_user.password):
            return failure(ErrorKind.UNAUTHORIZED, WRONG_PASSWORD_ERROR_MESSAGE)

        user_entity = await run_in_threadpool(
            self.user_store.find_user_by_id, current_user.id
        )
        if user_entity is None:
            return failure(ErrorKind.NOT_FOUND, CURRENT_USER_NOT_FOUND_ERROR_MESSAGE)

        email = user_entity.email
        await run_in_threadpool(self.user_store.delete_user_by_id, user_entity.id)
        await self._notify(
            email,
            email_templates.ACCOUNT_DELETED_SUBJECT,
            email_templates.account_deleted(email_templates.username_from_email(email)),
        )
        return ok()

    async def update_password(
        self, current_user: User, current_password: str, new_password: str
    ) -> Outcome:
        if not await self._password_matches(current_password, current_user.password):
            return failure(ErrorKind.UNAUTHORIZED, INCORRECT_PASSWORD_ERROR_MESSAGE)
        if not password_fits_bcrypt(new_password):
            return failure(ErrorKind.BAD_REQUEST, PASSWORD_TOO_LONG_ERROR_MESSAGE)

        await run_in_threadpool(
            self.user_store.change_user_password, current_user, new_password
        )
        await self._notify(
            current_user.email,
            email_templates.ACCOUNT_PASSWORD_CHANGED_SUBJECT,
            email_templates.password_changed(
                email_templates.username_from_email(current_user.email)
            ),
        )
        return ok(True)

    async def _password_matches(self, raw_password: str, encoded_password: str) -> bool:
        # bcrypt is CPU bound; keep it off the event loop
        return await run_in_threadpool(
            self.password_encoder.matches, raw_password, encoded_password
        )

    async def _notify(self, address: str, subject: str, body: str) -> None:
        """Send a follow-up email; the primary operation has already committed."""
        try:
            await self.dispatcher.send(address, subject, body)
        except NotificationDeliveryError as e:
            logger.warning(f"Notification '{subject}' to {address} not delivered: {e}")
