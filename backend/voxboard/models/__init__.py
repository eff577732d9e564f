"""
Voxboard Backend - ORM Models
==============================

Importing this package registers every table on `Base.metadata`
(used by Alembic autogenerate and `database.create_all()`).
"""

from voxboard.models.feedback import Feedback
from voxboard.models.history import History, Message
from voxboard.models.profile import Profile
from voxboard.models.report import Report
from voxboard.models.soundboard import Soundboard

__all__ = ["Feedback", "History", "Message", "Profile", "Report", "Soundboard"]
