"""ORM models. Importing this package registers every table with ``Base.metadata``."""

from .form import Form
from .submission import Submission
from .user import User

__all__ = ["Form", "Submission", "User"]
