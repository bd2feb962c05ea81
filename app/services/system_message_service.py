from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundException
from app.models.session_identity import SessionIdentity
from app.models.system_message import SystemMessage
from app.repositories.system_message_repository import SystemMessageRepository
from app.schemas.system_message_schemas import SystemMessageCreate


class SystemMessageService:
    """Service for public menu messages, scoped to the session's tenant"""

    def __init__(self, db: Session, identity: SessionIdentity):
        self.db = db
        self.repo = SystemMessageRepository(db, identity.tenant_id)

    def list_messages(self) -> list[SystemMessage]:
        return self.repo.get_ordered()

    def create_message(self, data: SystemMessageCreate) -> SystemMessage:
        return self.repo.add(SystemMessage(**data.model_dump()))

    def delete_message(self, message_id: int) -> None:
        message = self.repo.get(message_id)
        if not message:
            raise NotFoundException("System message not found")
        self.repo.delete(message)
