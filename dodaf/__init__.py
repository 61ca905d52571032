"""DoDAF 2.0 ontology: semantic schemas and the artifacts generated from them.

Ontology authors describe classes with the schema builder (dodaf.dsl). From
those schemas the package generates three artifacts:

- JSON-LD context (dodaf.context)
- OWL ontology in Turtle (dodaf.owl)
- SHACL shapes in Turtle (dodaf.shacl)

JSON-LD documents are checked by the SHACL validator
(dodaf.shacl_validation) and by the document validator (dodaf.validation),
which layers structural, metamodel (dodaf.metamodel) and SHACL checks. The
DoDAF core schemas live in dodaf.ontology. Requires rdflib and pyshacl.
"""
