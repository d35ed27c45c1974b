"""Service for user account management."""

import logging
from typing import List, Optional, Sequence

from app.application.guards import authorize_self_or_admin
from app.core.errors import Forbidden, UserAlreadyExists, UserNotFound, ValidationError
from app.domain.models import IdentityContext, Role, User, UserDocument
from app.domain.ports.persistence import UserRepository


class UserService:
    """Service for reading, editing and removing user accounts."""

    def __init__(self, user_repository: UserRepository, logger: Optional[logging.Logger] = None):
        self.user_repository = user_repository
        self.logger = logger or logging.getLogger(__name__)

    def list_users(self) -> List[User]:
        """List every registered user."""
        return self.user_repository.list_users()

    def get_user(self, user_id: int, identity: IdentityContext) -> User:
        """
        Get a user visible to the caller.

        Args:
            user_id: User ID
            identity: Authenticated caller

        Returns:
            The User

        Raises:
            Forbidden: If the caller is neither the user nor an admin
            UserNotFound: If the user does not exist
        """
        authorize_self_or_admin(identity, user_id)
        user = self.user_repository.get_user_by_id(user_id)
        if not user:
            raise UserNotFound()
        return user

    def update_user(
        self,
        user_id: int,
        identity: IdentityContext,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
        role: Optional[Role] = None,
    ) -> User:
        """
        Apply a partial profile update.

        Args:
            user_id: User ID
            identity: Authenticated caller
            first_name: New first name
            last_name: New last name
            email: New email, must not belong to another user
            role: New role, only an admin may change it

        Returns:
            The updated User

        Raises:
            Forbidden: If the caller may not edit this user or its role
            UserAlreadyExists: If the email is taken
            UserNotFound: If the user does not exist
        """
        authorize_self_or_admin(identity, user_id)
        if role is not None and not identity.is_admin:
            raise Forbidden("Only administrators can change roles")

        if email is not None:
            email = email.strip().lower()
            if not email:
                raise ValidationError("Email cannot be empty")
            existing = self.user_repository.get_user_by_email(email)
            if existing and existing.id != user_id:
                raise UserAlreadyExists()

        user = self.user_repository.update_user(
            user_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            role=role,
        )
        if not user:
            raise UserNotFound()
        self.logger.info("User %s updated by %s", user_id, identity.email)
        return user

    def add_documents(
        self,
        user_id: int,
        identity: IdentityContext,
        documents: Sequence[UserDocument],
    ) -> User:
        """
        Attach document references to a user.

        The files themselves live in external storage; only their names and
        storage references are recorded here.
        """
        authorize_self_or_admin(identity, user_id)
        if not documents:
            raise ValidationError("No documents were provided")
        user = self.user_repository.add_user_documents(user_id, documents)
        if not user:
            raise UserNotFound()
        self.logger.info("Documents uploaded for user %s", user_id)
        return user

    def delete_user(self, user_id: int) -> None:
        """
        Delete a user.

        Raises:
            UserHasPets: If the user still owns adopted pets
            UserNotFound: If the user does not exist
        """
        if not self.user_repository.delete_user(user_id):
            raise UserNotFound()
        self.logger.info("User %s deleted", user_id)
