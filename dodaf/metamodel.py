"""DoDAF 2.0 metamodel tables.

Descriptive records for element and relationship types, used for structural
field-presence checks of plain (compact-form) element and relationship
dicts. The records are plain immutable data: ``super_class`` documents the
lineage of a type and carries no behavior. Only a type's own properties are
checked.

Types without a record are accepted: a default record requiring ``id``,
``name`` and ``description`` is synthesized for them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

# ---------------------------------------------------------------------------
# Record types
# ---------------------------------------------------------------------------

PROPERTY_TYPES = ("string", "boolean", "number", "date", "reference", "array")
CONSTRAINT_TYPES = ("cardinality", "valueRange", "pattern", "reference", "custom")


@dataclass(frozen=True)
class MetaModelConstraint:
    type: str
    description: str
    parameters: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MetaModelProperty:
    name: str
    type: str
    required: bool
    description: str


@dataclass(frozen=True)
class MetaModelClass:
    """Descriptive record for one element or relationship type."""
    name: str
    description: str
    super_class: str | None = None
    properties: tuple[MetaModelProperty, ...] = ()
    constraints: tuple[MetaModelConstraint, ...] = ()

    @property
    def required_properties(self) -> list[str]:
        return [p.name for p in self.properties if p.required]


@dataclass
class MetaModelValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)

    def summary(self) -> str:
        lines = []
        status = "VALID" if self.valid else "INVALID"
        lines.append(f"Metamodel check: {status}")
        lines.append("-" * 50)
        for e in self.errors:
            lines.append(f"    - {e}")
        return "\n".join(lines)


def _required(name: str, type: str, description: str) -> MetaModelProperty:
    return MetaModelProperty(name, type, True, description)


def _optional(name: str, type: str, description: str) -> MetaModelProperty:
    return MetaModelProperty(name, type, False, description)


def _element(name: str, description: str, *properties: MetaModelProperty,
             super_class: str = "Element") -> MetaModelClass:
    return MetaModelClass(name, description, super_class, tuple(properties))


def _relationship(name: str, description: str, *properties: MetaModelProperty) -> MetaModelClass:
    return MetaModelClass(name, description, None, tuple(properties))


# ---------------------------------------------------------------------------
# Type names
# ---------------------------------------------------------------------------

VIEW_TYPES = ("AV", "OV", "SV", "TV", "DIV")

ELEMENT_STATUSES = ("draft", "review", "approved", "deprecated")

ELEMENT_TYPES = (
    # Core
    "ArchitectureDescription", "View", "Product", "Element", "Relationship",
    # Operational
    "OperationalActivity", "OperationalPerformer", "OperationalResource",
    "OperationalResourceFlow", "OperationalEvent", "OperationalNode", "OperationalExchange",
    # System
    "System", "SystemInterface", "SystemFunction", "SystemResource", "SystemResourceFlow",
    "SystemNode", "SystemExchange",
    # Data
    "Data", "DataInterface", "DataRelationship", "DataEntity", "DataAttribute",
    # Services
    "ServiceDescription", "Service", "Information", "Representation", "InformationType",
    "RepresentationType", "Port", "ServicePort", "ServiceInterface",
    # Data models
    "ConceptualDataModel", "LogicalDataModel", "PhysicalDataModel", "DataModel", "Entity",
    "Attribute", "RelationshipEntity", "Domain", "Key", "Constraint", "Index", "Table",
    "Column", "ViewDefinition", "Procedure", "Trigger", "Sequence", "Synonym", "Schema",
    # Logical models
    "LogicalArchitecture", "LogicalActivity", "LogicalPerformer", "LogicalResource",
    "LogicalSystem", "LogicalInterface", "LogicalNode", "LogicalFlow", "LogicalConstraint",
    "LogicalComponent", "LogicalService", "LogicalDataFlow", "LogicalControlFlow",
    "LogicalInformationFlow", "LogicalPhysicalFlow", "LogicalOperationalActivity",
    "LogicalSystemFunction", "LogicalDataStructure", "LogicalBusinessRule", "LogicalPolicy",
    "LogicalStandard", "LogicalRequirement", "LogicalCapability", "LogicalServiceInterface",
    "LogicalDataInterface", "LogicalSystemInterface", "LogicalNodeConnector", "LogicalLink",
    "LogicalNetwork", "LogicalProtocol", "LogicalMessage", "LogicalEvent", "LogicalState",
    "LogicalTransition", "LogicalCondition", "LogicalAction", "LogicalDecision", "LogicalMerge",
    "LogicalFork", "LogicalJoin", "LogicalStart", "LogicalEnd",
    # Standards
    "Standard", "StandardProfile", "TechnicalStandard",
    # Organizational
    "Organization", "OrganizationalUnit", "Person", "Capability",
    # Infrastructure
    "Facility", "Location", "Equipment",
    # Security
    "SecurityAttribute", "SecurityControl", "InformationAssuranceRequirement",
)

_LOGICAL_RELATIONSHIPS = tuple(
    f"Logical{name}Relationship" for name in (
        "Architecture", "Activity", "Performer", "Resource", "System", "Interface", "Node",
        "Flow", "Constraint", "Component", "Service", "DataFlow", "ControlFlow",
        "InformationFlow", "PhysicalFlow", "OperationalActivity", "SystemFunction",
        "DataStructure", "BusinessRule", "Policy", "Standard", "Requirement", "Capability",
        "ServiceInterface", "DataInterface", "SystemInterface", "NodeConnector", "Link",
        "Network", "Protocol", "Message", "Event", "State", "Transition", "Condition",
        "Action", "Decision", "Merge", "Fork", "Join", "Start", "End",
    )
) + (
    "LogicalSequenceFlow", "LogicalMessageFlow", "LogicalObjectFlow", "LogicalControlFlow",
    "LogicalExceptionFlow", "LogicalCompensationFlow", "LogicalCancelFlow", "LogicalTimerFlow",
    "LogicalSignalFlow", "LogicalDataAssociation", "LogicalAnnotation",
)

RELATIONSHIP_TYPES = (
    # General
    "Association", "Aggregation", "Composition", "Generalization", "Dependency", "Realization",
    # Operational
    "OperationalActivityFlow", "OperationalPerformerAssignment", "OperationalResourceAssignment",
    "OperationalResourceFlow", "OperationalEventTrigger", "OperationalNeedline",
    # System
    "SystemInterfaceConnection", "SystemFunctionFlow", "SystemResourceAssignment",
    "SystemResourceFlow", "SystemNeedline", "SystemCapabilityRealization",
    # Data
    "DataInterfaceConnection", "DataRelationship", "DataEntityRelationship",
    "DataAttributeRelationship",
    # Services
    "ServiceDescribedBy", "ServicePortDescribedBy", "RepresentedBy", "Description",
    "ServicePortBeingDescribed", "ServiceBeingDescribed", "InformationDescribedBy",
    "RepresentationDescribedBy",
    # Data models
    "DataModelRelationship", "EntityRelationship", "AttributeRelationship",
    "TableRelationship", "ColumnRelationship", "SchemaRelationship", "KeyRelationship",
    "ConstraintRelationship", "IndexRelationship", "Inheritance", "AssociationEntity",
    "AggregationEntity", "CompositionEntity", "DependencyEntity", "GeneralizationEntity",
    "RealizationEntity",
) + _LOGICAL_RELATIONSHIPS + (
    # Organizational
    "OrganizationalHierarchy", "OrganizationalReporting", "CapabilityOwnership",
    "PersonAssignment",
    # Infrastructure
    "FacilityLocation", "EquipmentAssignment", "LocationHierarchy",
    # Security
    "SecurityControlImplementation", "SecurityAttributeAssignment",
    # Traceability
    "Traceability", "Implementation", "Satisfaction", "Verification", "Validation",
)


# ---------------------------------------------------------------------------
# Element metamodel
# ---------------------------------------------------------------------------

_ELEMENTS = (
    # Core
    MetaModelClass(
        "ArchitectureDescription",
        "The root element of a DoDAF architecture description",
        None,
        (
            _required("id", "string", "Unique identifier for the architecture description"),
            _required("name", "string", "Human-readable name of the architecture"),
            _required("description", "string", "Description of the architecture"),
            _required("version", "string", "Version of the architecture description"),
            _required("views", "array", "Collection of views in the architecture"),
            _required("metadata", "reference", "Metadata about the architecture"),
        ),
        (MetaModelConstraint("cardinality", "Must have at least one view",
                             MappingProxyType({"min": 1, "property": "views"})),),
    ),
    MetaModelClass(
        "View",
        "A viewpoint of the architecture focusing on specific concerns",
        None,
        (
            _required("id", "string", "Unique identifier for the view"),
            _required("type", "string", "Type of view (AV, OV, SV, TV, DIV)"),
            _required("name", "string", "Human-readable name of the view"),
            _required("description", "string", "Description of the view"),
            _required("purpose", "string", "Purpose of the view"),
            _required("products", "array", "Collection of products in the view"),
        ),
        (MetaModelConstraint("valueRange", "View type must be one of the standard DoDAF view types",
                             MappingProxyType({"values": list(VIEW_TYPES)})),),
    ),
    MetaModelClass(
        "Product",
        "A specific artifact or representation within a view",
        None,
        (
            _required("id", "string", "Unique identifier for the product"),
            _required("viewId", "string", "Reference to the parent view"),
            _required("number", "string", "Product number (e.g., OV-1, SV-2)"),
            _required("name", "string", "Human-readable name of the product"),
            _required("description", "string", "Description of the product"),
            _required("purpose", "string", "Purpose of the product"),
            _optional("elements", "array", "Collection of elements in the product"),
            _optional("relationships", "array", "Collection of relationships in the product"),
        ),
        (MetaModelConstraint("pattern", "Product number must follow DoDAF naming convention",
                             MappingProxyType({"pattern": r"^[A-Z]{2,3}-\d+[a-z]?$"})),),
    ),
    MetaModelClass(
        "Element",
        "A basic building block within a product",
        None,
        (
            _required("id", "string", "Unique identifier for the element"),
            _required("productId", "string", "Reference to the parent product"),
            _required("type", "string", "Type of element from the DoDAF meta model"),
            _required("name", "string", "Human-readable name of the element"),
            _required("description", "string", "Description of the element"),
            _optional("properties", "reference", "Additional properties of the element"),
            _optional("metadata", "reference", "Metadata about the element"),
        ),
    ),
    MetaModelClass(
        "Relationship",
        "A connection between elements",
        None,
        (
            _required("id", "string", "Unique identifier for the relationship"),
            _required("productId", "string", "Reference to the parent product"),
            _required("type", "string", "Type of relationship from the DoDAF meta model"),
            _required("name", "string", "Human-readable name of the relationship"),
            _required("description", "string", "Description of the relationship"),
            _required("sourceId", "string", "Reference to the source element"),
            _required("targetId", "string", "Reference to the target element"),
            _optional("properties", "reference", "Additional properties of the relationship"),
        ),
        (MetaModelConstraint("reference", "Source and target IDs must reference existing elements",
                             MappingProxyType({"property": "sourceId,targetId"})),),
    ),

    # Operational
    _element(
        "OperationalActivity", "An activity performed by operational performers",
        _optional("inputs", "array", "Resources required as inputs"),
        _optional("outputs", "array", "Resources produced as outputs"),
        _optional("performers", "array", "Operational performers that execute this activity"),
    ),
    _element(
        "OperationalPerformer", "An entity that performs operational activities",
        _optional("activities", "array", "Activities performed by this performer"),
        _optional("resources", "array", "Resources used by this performer"),
    ),
    _element(
        "OperationalResource", "A resource used in operational activities",
        _optional("resourceType", "string", "Type of operational resource"),
        _optional("quantity", "string", "Quantity of the resource"),
    ),

    # System
    _element(
        "System", "A system that provides capabilities",
        _optional("interfaces", "array", "System interfaces"),
        _optional("functions", "array", "Functions provided by the system"),
        _optional("resources", "array", "Resources used by the system"),
    ),
    _element(
        "SystemInterface", "An interface between systems",
        _optional("interfaceType", "string", "Type of system interface"),
        _optional("protocol", "string", "Communication protocol"),
    ),

    # Data
    _element(
        "Data", "Data entity used in the architecture",
        _optional("dataType", "string", "Type of data"),
        _optional("format", "string", "Data format"),
    ),

    # Standards
    _element(
        "Standard", "A technical or operational standard",
        _optional("standardType", "string", "Type of standard"),
        _optional("authority", "string", "Authority that defines the standard"),
        _optional("version", "string", "Version of the standard"),
    ),

    # Organizational
    _element(
        "Organization", "An organizational entity",
        _optional("type", "string", "Type of organization"),
        _optional("parent", "string", "Parent organization"),
    ),

    # Infrastructure
    _element(
        "Facility", "A physical facility",
        _optional("location", "string", "Location of the facility"),
        _optional("type", "string", "Type of facility"),
    ),

    # Security
    _element(
        "SecurityAttribute", "A security attribute or classification",
        _optional("classification", "string", "Security classification level"),
        _optional("category", "string", "Security category"),
    ),

    # Services
    _element(
        "ServiceDescription", "Description of a service",
        _optional("serviceType", "string", "Type of service"),
        _optional("serviceLevel", "string", "Service level agreement"),
        _optional("services", "array", "Services described by this description"),
    ),
    _element(
        "Service", "A service provided or consumed",
        _optional("serviceType", "string", "Type of service (e.g., web service, API)"),
        _optional("protocol", "string", "Service protocol"),
        _optional("ports", "array", "Service ports"),
        _optional("serviceDescription", "string", "Reference to service description"),
    ),
    _element(
        "Information", "Information entity used in services",
        _optional("informationType", "string", "Type of information"),
        _optional("classification", "string", "Information classification"),
        _optional("representations", "array", "Information representations"),
    ),
    _element(
        "Representation", "Representation of information",
        _optional("representationType", "string", "Type of representation"),
        _optional("format", "string", "Format of representation"),
        _optional("information", "string", "Information being represented"),
    ),
    _element(
        "InformationType", "Type definition for information",
        _optional("baseType", "string", "Base data type"),
        _optional("constraints", "array", "Type constraints"),
        _optional("information", "array", "Information instances of this type"),
    ),
    _element(
        "RepresentationType", "Type definition for representations",
        _optional("baseType", "string", "Base representation type"),
        _optional("mediaType", "string", "Media type"),
        _optional("representations", "array", "Representations of this type"),
    ),
    _element(
        "Port", "A port for service interaction",
        _optional("portType", "string", "Type of port"),
        _optional("direction", "string", "Port direction (in/out/inout)"),
        _optional("protocol", "string", "Communication protocol"),
    ),
    _element(
        "ServicePort", "A port specifically for services",
        _optional("serviceInterface", "string", "Associated service interface"),
        _optional("operations", "array", "Service operations available through this port"),
        super_class="Port",
    ),
    _element(
        "ServiceInterface", "Interface definition for services",
        _optional("interfaceType", "string", "Type of service interface"),
        _optional("operations", "array", "Interface operations"),
        _optional("ports", "array", "Ports implementing this interface"),
    ),
)


# ---------------------------------------------------------------------------
# Relationship metamodel
# ---------------------------------------------------------------------------

_RELATIONSHIPS = (
    # Services
    _relationship("ServiceDescribedBy", "Service described by service description",
                  _optional("descriptionType", "string", "Type of description")),
    _relationship("ServicePortDescribedBy", "Service port described by description",
                  _optional("descriptionType", "string", "Type of port description")),
    _relationship("RepresentedBy", "Information represented by representation",
                  _optional("representationType", "string", "Type of representation")),
    _relationship("Description", "General description relationship",
                  _optional("descriptionType", "string", "Type of description")),
    _relationship("ServicePortBeingDescribed", "Service port being described"),
    _relationship("ServiceBeingDescribed", "Service being described"),
    _relationship("InformationDescribedBy", "Information described by information type"),
    _relationship("RepresentationDescribedBy", "Representation described by representation type"),

    # General
    _relationship("Association", "A general association between elements"),
    _relationship("Aggregation", "A whole-part relationship",
                  _optional("multiplicity", "string", "Multiplicity of the aggregation")),
    _relationship("Composition", "Strong whole-part relationship"),
    _relationship("Generalization", "Inheritance relationship"),
    _relationship("Dependency", "Dependency relationship"),
    _relationship("Realization", "Realization relationship"),

    # Operational
    _relationship("OperationalActivityFlow", "Flow of control between operational activities",
                  _optional("trigger", "string", "Trigger condition for the flow"),
                  _optional("resources", "array", "Resources that flow with the activity")),
    _relationship("OperationalResourceFlow", "Flow of resources between operational elements",
                  _optional("resourceType", "string", "Type of resource being transferred"),
                  _optional("quantity", "string", "Quantity of resource flow")),
    _relationship("OperationalPerformerAssignment", "Assignment of performer to activity"),
    _relationship("OperationalResourceAssignment", "Assignment of resource to activity"),
    _relationship("OperationalEventTrigger", "Event trigger for activity"),
    _relationship("OperationalNeedline", "Needline between operational elements"),

    # System
    _relationship("SystemInterfaceConnection", "Connection between system interfaces",
                  _optional("protocol", "string", "Communication protocol"),
                  _optional("bandwidth", "string", "Required bandwidth")),
    _relationship("SystemFunctionFlow", "Flow between system functions"),
    _relationship("SystemResourceAssignment", "Assignment of resource to system"),
    _relationship("SystemResourceFlow", "Flow of system resources"),
    _relationship("SystemNeedline", "Needline between system elements"),
    _relationship("SystemCapabilityRealization", "System realization of capability"),

    # Data
    _relationship("DataInterfaceConnection", "Connection between data interfaces"),
    _relationship("DataRelationship", "Relationship between data elements"),
    _relationship("DataEntityRelationship", "Relationship between data entities"),
    _relationship("DataAttributeRelationship", "Relationship between data attributes"),

    # Traceability
    _relationship("Traceability", "Traceability link between elements in different views",
                  _optional("rationale", "string", "Rationale for the traceability link"),
                  _optional("strength", "string", "Strength of the traceability relationship")),
    _relationship("Implementation", "Implementation relationship"),
    _relationship("Satisfaction", "Satisfaction relationship"),
    _relationship("Verification", "Verification relationship"),
    _relationship("Validation", "Validation relationship"),

    # Organizational
    _relationship("OrganizationalHierarchy", "Organizational hierarchy"),
    _relationship("OrganizationalReporting", "Reporting relationship"),
    _relationship("CapabilityOwnership", "Capability ownership"),
    _relationship("PersonAssignment", "Person assignment"),

    # Infrastructure
    _relationship("FacilityLocation", "Facility location relationship"),
    _relationship("EquipmentAssignment", "Equipment assignment"),
    _relationship("LocationHierarchy", "Location hierarchy"),

    # Security
    _relationship("SecurityControlImplementation", "Security control implementation"),
    _relationship("SecurityAttributeAssignment", "Security attribute assignment"),
)

ELEMENT_METAMODEL: Mapping[str, MetaModelClass] = MappingProxyType(
    {record.name: record for record in _ELEMENTS}
)
RELATIONSHIP_METAMODEL: Mapping[str, MetaModelClass] = MappingProxyType(
    {record.name: record for record in _RELATIONSHIPS}
)


# ---------------------------------------------------------------------------
# Lookup and validation
# ---------------------------------------------------------------------------

def get_element_metamodel(element_type: str) -> MetaModelClass | None:
    return ELEMENT_METAMODEL.get(element_type)


def get_relationship_metamodel(relationship_type: str) -> MetaModelClass | None:
    return RELATIONSHIP_METAMODEL.get(relationship_type)


def default_metamodel(name: str, kind: str) -> MetaModelClass:
    """Permissive record for a type with no registered entry."""
    return MetaModelClass(
        name=name,
        description=f"A {kind} in the DoDAF meta model",
        properties=(
            _required("id", "string", "Unique identifier"),
            _required("name", "string", "Human-readable name"),
            _required("description", "string", "Description"),
            _optional("properties", "reference", "Additional properties"),
        ),
    )


def validate_element_against_metamodel(element: Mapping[str, Any]) -> MetaModelValidationResult:
    """Check that ``element`` carries every property its type's record requires."""
    return _validate(element, "element", get_element_metamodel)


def validate_relationship_against_metamodel(relationship: Mapping[str, Any]) -> MetaModelValidationResult:
    return _validate(relationship, "relationship", get_relationship_metamodel)


def _validate(instance: Mapping[str, Any], kind: str, lookup) -> MetaModelValidationResult:
    type_name = instance.get("type")
    record = lookup(type_name) if isinstance(type_name, str) else None
    if record is None:
        record = default_metamodel(str(type_name), kind)

    errors = [
        f"Required property '{name}' is missing for {kind} type '{type_name}'"
        for name in record.required_properties
        if name not in instance
    ]
    return MetaModelValidationResult(valid=not errors, errors=errors)
