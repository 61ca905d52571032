"""Generator options and the DoDAF presets."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .vocab import DCT, DODAF, FOAF, OWL, PREFIXES, RDF, RDFS, SCHEMA

DEFAULT_BASE = PREFIXES["dodaf"]
DEFAULT_ONTOLOGY_IRI = "https://dodaf.defense.gov/ontology"


@dataclass(frozen=True)
class ContextOptions:
    """Options for the JSON-LD context generator.

    ``version`` is emitted as the JSON number ``@version``; JSON-LD 1.1
    processors reject the string form. ``custom_prefixes`` entries overwrite
    standard prefixes of the same name.
    """
    base: str = DEFAULT_BASE
    version: float = 1.1
    include_standard_prefixes: bool = True
    custom_prefixes: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class OwlOptions:
    """Options for the OWL generator.

    ``infer_subclass_from_type_enum`` turns on the legacy heuristic that
    promotes enumerated values of a ``type`` object property to
    ``rdfs:subClassOf`` parents. It is off unless asked for.
    """
    ontology_iri: str = DEFAULT_ONTOLOGY_IRI
    version_iri: str | None = None
    imports: tuple[str, ...] = ()
    custom_prefixes: Mapping[str, str] = field(default_factory=dict)
    include_annotations: bool = True
    infer_subclass_from_type_enum: bool = False


@dataclass(frozen=True)
class ShaclOptions:
    """Options for the SHACL generator.

    ``include_base`` binds the empty prefix to ``base`` in the Turtle output.
    """
    include_base: bool = True
    base: str = DEFAULT_BASE
    inline_property_shapes: bool = False
    custom_prefixes: Mapping[str, str] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# DoDAF presets
# ---------------------------------------------------------------------------

DODAF_CONTEXT_OPTIONS = ContextOptions(
    base=DEFAULT_BASE,
    include_standard_prefixes=True,
    custom_prefixes=MappingProxyType({
        "name": str(SCHEMA.name),
        "description": str(SCHEMA.description),
        "purpose": str(DODAF.purpose),
        "created": str(DCT.created),
        "modified": str(DCT.modified),
        "author": str(DCT.creator),
        "organization": str(FOAF.organization),
    }),
)

DODAF_OWL_OPTIONS = OwlOptions(
    ontology_iri=DEFAULT_ONTOLOGY_IRI,
    version_iri="https://dodaf.defense.gov/ontology/2.0",
    imports=(str(OWL), str(RDFS), str(RDF)),
    custom_prefixes=MappingProxyType({"dodaf": PREFIXES["dodaf"]}),
    include_annotations=True,
)

DODAF_SHACL_OPTIONS = ShaclOptions(
    include_base=True,
    inline_property_shapes=False,
    custom_prefixes=MappingProxyType({"dodaf": PREFIXES["dodaf"]}),
)
