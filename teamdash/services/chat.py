# teamdash/services/chat.py
from datetime import datetime
from typing import Callable, List
import logging

from teamdash.core.errors import BadRequestError, NotFoundError
from teamdash.db.store import Store
from teamdash.schemas.chat import Group, Message
from teamdash.schemas.user import User
from teamdash.services import policy

logger = logging.getLogger(__name__)


class ChatService:
    """Project group chat, gated on project membership."""

    def __init__(self, store: Store, clock: Callable[[], datetime] = datetime.utcnow):
        self.store = store
        self.clock = clock

    def get_group_by_project(self, project_id: int) -> Group:
        group = self.store.get_group_by_project(project_id)
        if group is None:
            raise NotFoundError(f"Group not found for project: {project_id}")
        return group

    def get_group(self, group_id: int) -> Group:
        group = self.store.get_group(group_id)
        if group is None:
            raise NotFoundError(f"Group not found: {group_id}")
        return group

    def _check_access(self, group: Group, user: User) -> None:
        if group.project_id is None:
            return
        project = self.store.get_project(group.project_id)
        if project is None:
            raise NotFoundError(f"Project not found: {group.project_id}")
        is_member = self.store.is_project_member(project.id, user.id)
        policy.ensure_can_access_group(user, project, is_member)

    def list_messages(self, group_id: int, user: User) -> List[Message]:
        group = self.get_group(group_id)
        self._check_access(group, user)
        return self.store.list_messages(group.id)

    def latest_messages(self, group_id: int, user: User, limit: int = 20) -> List[Message]:
        """Newest first, for previews."""
        group = self.get_group(group_id)
        self._check_access(group, user)
        return self.store.latest_messages(group.id, max(limit, 1))

    def send_message(self, group_id: int, content: str, sender: User) -> Message:
        group = self.get_group(group_id)
        self._check_access(group, sender)
        if not content or not content.strip():
            raise BadRequestError("Message content cannot be empty")
        with self.store.atomic():
            message = self.store.add_message(group.id, sender.id, content, self.clock())
        logger.info("User %s sent message %s to group %s", sender.id, message.id, group.id)
        return message
