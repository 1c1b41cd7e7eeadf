from accounting_service.models.entities import (
    Account,
    Category,
    EntityCollection,
    Journal,
    PageWindow,
)
from accounting_service.models.failure import (
    FailureDetail,
    FailureKind,
    IdentifierConflictError,
    IndexOutOfRangeError,
    InvalidKeyError,
    KnownError,
    MigrationStepError,
    NotFoundError,
    RepositoryFailureError,
    ValidationFailedError,
)
from accounting_service.models.resources import (
    AccountResource,
    CategoryResource,
    JournalResource,
    NewCategoryId,
    ResourceCollection,
)

__all__ = [
    "Account",
    "AccountResource",
    "Category",
    "CategoryResource",
    "EntityCollection",
    "FailureDetail",
    "FailureKind",
    "IdentifierConflictError",
    "IndexOutOfRangeError",
    "InvalidKeyError",
    "Journal",
    "JournalResource",
    "KnownError",
    "MigrationStepError",
    "NewCategoryId",
    "NotFoundError",
    "PageWindow",
    "RepositoryFailureError",
    "ResourceCollection",
    "ValidationFailedError",
]
