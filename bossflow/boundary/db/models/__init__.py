"""
Database models package.

Exports:
  - UserModel: User ORM model
  - DiagramModel: Diagram ORM model

Dependencies: sqlalchemy, bossflow.boundary.db.base
System role: Database model definitions for domain entities
"""

from bossflow.boundary.db.models.user_model import UserModel
from bossflow.boundary.db.models.diagram_model import DiagramModel

__all__ = [
    "UserModel",
    "DiagramModel",
]
