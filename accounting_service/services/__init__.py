"""
Accounting services.

Resource addressing, collection paging, the category namespace and the
category identifier migration.
"""

from accounting_service.services.category_migration import (
    MigrationResult,
    MigrationStep,
    migrate_category_id,
)
from accounting_service.services.category_namespace import (
    category_key_errors,
    get_by_key,
    get_by_prefix,
    is_descendant,
    validate_category_key,
)
from accounting_service.services.collection_assembler import assemble_collection, page_url
from accounting_service.services.identifier_codec import decode, decode_at, encode, parse_key
from accounting_service.services.translation import ResourceTranslator

__all__ = [
    "MigrationResult",
    "MigrationStep",
    "ResourceTranslator",
    "assemble_collection",
    "category_key_errors",
    "decode",
    "decode_at",
    "encode",
    "get_by_key",
    "get_by_prefix",
    "is_descendant",
    "migrate_category_id",
    "page_url",
    "parse_key",
    "validate_category_key",
]
