"""Entity shapes shared by the client layers.

The client holds the same records the API returns, so the read schemas are
the entities. Provisional client ids are plain strings like server ids.
"""

from dsa_flash.schemas.problems import DifficultyType, ProblemCreate, ProblemRead, ProblemUpdate
from dsa_flash.schemas.topics import TopicCreate, TopicRead, TopicUpdate

Topic = TopicRead
Problem = ProblemRead

# Fields a form submits when creating a record
TopicFields = TopicCreate
ProblemFields = ProblemCreate

__all__ = [
    "DifficultyType",
    "Problem",
    "ProblemFields",
    "ProblemUpdate",
    "Topic",
    "TopicFields",
    "TopicUpdate",
]
