from papermark.models.dataroom import Dataroom, DataroomDocument, DataroomFolder
from papermark.models.document import Document
from papermark.models.team import Team, UserTeam
from papermark.models.user import User

__all__ = ["User", "Team", "UserTeam", "Document", "Dataroom", "DataroomFolder", "DataroomDocument"]
