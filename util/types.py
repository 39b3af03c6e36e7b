# util/types.py
from typing import Literal


# Flow: Narrow types for notification planning.
NotificationType = Literal["comment_added"]
