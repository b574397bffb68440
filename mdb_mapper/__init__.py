"""
MDB_MAPPER - MongoDB Document Mapper

Generic object/document mapping for document-store repositories: converts
entities with instants, enumerations and value objects into MongoDB
documents, and rebuilds entities from stored documents field by field.
"""

# Configuration
from .config import MapperConfig, MapperSettings
# Value objects
from .entities import DatePeriod, Period
# Errors
from .exceptions import (ConfigurationError, InvalidArgumentError, MapperError,
                         MethodNotImplementedError,
                         MissingRequiredArgumentError, ObjectExistsError,
                         ObjectNotFoundError,
                         UnrecognizedEnumerationValueError)
# Mapping layer
from .mapping import (ABSENT, Custom, DocumentConverter, DocumentMapper,
                      Enumeration, Identity, MapperRegistry, Scalar,
                      ScalarKind)
# Messaging
from .messaging import Publisher
# Repositories
from .repositories import (DocumentRepository, DocumentStore,
                           InMemoryDocumentStore, MongoDocumentStore)

__version__ = "0.1.0"

__all__ = [
    # Mapping
    "DocumentMapper",
    "DocumentConverter",
    "MapperRegistry",
    "ABSENT",
    "Identity",
    "Scalar",
    "ScalarKind",
    "Enumeration",
    "Custom",
    # Value objects
    "Period",
    "DatePeriod",
    # Repositories
    "DocumentRepository",
    "DocumentStore",
    "InMemoryDocumentStore",
    "MongoDocumentStore",
    # Messaging
    "Publisher",
    # Configuration
    "MapperConfig",
    "MapperSettings",
    # Errors
    "MapperError",
    "ObjectNotFoundError",
    "ObjectExistsError",
    "InvalidArgumentError",
    "MissingRequiredArgumentError",
    "MethodNotImplementedError",
    "UnrecognizedEnumerationValueError",
    "ConfigurationError",
]
