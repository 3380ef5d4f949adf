"""Model exports for SQLAlchemy/SQLModel metadata discovery."""

from intake.models.action_items import ActionItemRecord

__all__ = ["ActionItemRecord"]
