"""
metafactory.core: type catalogs and the failure taxonomy shared by every layer.

Modules:
  - errors: ClassCreationError and its subclasses
  - types_protocol: TypeCatalog protocol (opaque type handles)
  - types_core: TypeId/TypeTable registered type graph
  - reflect_catalog: ReflectiveCatalog over Python classes
"""

__all__ = [
    "errors",
    "types_protocol",
    "types_core",
    "reflect_catalog",
]
