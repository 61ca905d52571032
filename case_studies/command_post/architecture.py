"""Command Post: a small DoDAF architecture document.

One Operational View with an OV-5a product (two activities and the flow
between them) and one Systems View with an SV-1 product (a system and its
interface). The document is plain JSON-LD without its own @context; it is read
with the DoDAF context.

build_architecture() returns the conforming document. The broken_* builders
each introduce one class of defect.
"""

import copy
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

BASE = "https://example.mil/architectures/command-post"


def _element(path, product, element_type, name, description=None):
    element = {
        "id": f"{BASE}/{path}",
        "type": "Element",
        "productId": f"{BASE}/{product}",
        "elementType": element_type,
        "name": name,
    }
    if description is not None:
        element["description"] = description
    return element


def _relationship(path, product, relationship_type, name, source, target):
    return {
        "id": f"{BASE}/{path}",
        "type": "Relationship",
        "productId": f"{BASE}/{product}",
        "relationshipType": relationship_type,
        "name": name,
        "description": f"{name} between {source} and {target}",
        "sourceId": f"{BASE}/{source}",
        "targetId": f"{BASE}/{target}",
    }


def build_operational_view() -> dict:
    """OV with an OV-5a activity decomposition."""
    ov5a = {
        "id": f"{BASE}/products/ov-5a",
        "type": "Product",
        "viewId": f"{BASE}/views/ov",
        "number": "OV-5a",
        "name": "Operational Activity Decomposition Tree",
        "purpose": "Decompose command activities",
        "elements": [
            _element("elements/plan", "products/ov-5a", "OperationalActivity",
                     "Plan Mission", "Produce the mission plan"),
            _element("elements/execute", "products/ov-5a", "OperationalActivity",
                     "Execute Mission", "Carry out the mission plan"),
        ],
        "relationships": [
            _relationship("relationships/plan-execute", "products/ov-5a",
                          "OperationalActivityFlow", "Plan to Execute",
                          "elements/plan", "elements/execute"),
        ],
    }
    return {
        "id": f"{BASE}/views/ov",
        "type": "View",
        "viewType": "OV",
        "name": "Operational View",
        "description": "Operational activities of the command post",
        "purpose": "Describe what the command post does",
        "products": [ov5a],
    }


def build_systems_view() -> dict:
    """SV with an SV-1 interface description."""
    sv1 = {
        "id": f"{BASE}/products/sv-1",
        "type": "Product",
        "viewId": f"{BASE}/views/sv",
        "number": "SV-1",
        "name": "Systems Interface Description",
        "elements": [
            _element("elements/c2-system", "products/sv-1", "System",
                     "C2 System", "Command and control system"),
            _element("elements/radio-link", "products/sv-1", "SystemInterface",
                     "Radio Link", "Tactical radio interface"),
        ],
        "relationships": [
            _relationship("relationships/c2-radio", "products/sv-1",
                          "SystemInterfaceConnection", "C2 to Radio",
                          "elements/c2-system", "elements/radio-link"),
        ],
    }
    return {
        "id": f"{BASE}/views/sv",
        "type": "View",
        "viewType": "SV",
        "name": "Systems View",
        "description": "Systems supporting the command post",
        "purpose": "Describe the supporting systems",
        "products": [sv1],
    }


def build_architecture() -> dict:
    return {
        "id": BASE,
        "type": "Architecture",
        "name": "Command Post Architecture",
        "description": "Reference architecture for a tactical command post",
        "version": "1.0",
        "created": "2024-01-15T10:00:00Z",
        "metadata": {
            "id": f"{BASE}/metadata",
            "type": "ArchitectureMetadata",
            "author": "Architecture Team",
            "organization": "Joint Staff J6",
            "classification": "UNCLASSIFIED",
        },
        "views": [build_operational_view(), build_systems_view()],
    }


# ---------------------------------------------------------------------------
# Defective variants
# ---------------------------------------------------------------------------

def broken_untyped_root() -> dict:
    """Root without the Architecture type."""
    doc = build_architecture()
    del doc["type"]
    return doc


def broken_missing_name() -> dict:
    doc = build_architecture()
    del doc["name"]
    return doc


def broken_shapes() -> dict:
    """Structurally sound, but breaks three shapes: view type, product number, element name."""
    doc = copy.deepcopy(build_architecture())
    ov = doc["views"][0]
    ov["viewType"] = "XV"
    ov5a = ov["products"][0]
    ov5a["number"] = "ov5a"
    del ov5a["elements"][0]["name"]
    return doc


def unknown_element_type() -> dict:
    """An element of a type the metamodel does not know, without a description."""
    doc = build_architecture()
    sv1 = doc["views"][1]["products"][0]
    sv1["elements"].append(
        _element("elements/widget", "products/sv-1", "CustomWidget", "Widget")
    )
    return doc
