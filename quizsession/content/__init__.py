from .cache import ContentCache
from .categories import find_category, load_categories
from .schema import QuestionDoc, QuizDocument
from .sources import ContentSource, DirectorySource, MappingSource

__all__ = [
    "ContentCache",
    "ContentSource",
    "DirectorySource",
    "MappingSource",
    "QuestionDoc",
    "QuizDocument",
    "find_category",
    "load_categories",
]
