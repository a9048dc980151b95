"""
Federation and join definitions used while composing a service schema.

``FEDERATION_PRELUDE_SDL`` declares what a federation 2 service may use
without declaring it itself. ``SUPERGRAPH_PRELUDE_SDL`` declares what a
composed supergraph carries besides the service's own types.
"""

from __future__ import annotations

from functools import cache

from graphql.language import DefinitionNode, parse

LINK_SPEC_URL = "https://specs.apollo.dev/link/v1.0"
JOIN_SPEC_URL = "https://specs.apollo.dev/join/v0.3"

FEDERATION_PRELUDE_SDL = """
directive @key(fields: FieldSet!, resolvable: Boolean = true) repeatable on OBJECT | INTERFACE
directive @shareable repeatable on OBJECT | FIELD_DEFINITION
directive @external on OBJECT | FIELD_DEFINITION
directive @requires(fields: FieldSet!) on FIELD_DEFINITION
directive @provides(fields: FieldSet!) on FIELD_DEFINITION
directive @extends on OBJECT | INTERFACE
directive @override(from: String!) on FIELD_DEFINITION
directive @inaccessible on FIELD_DEFINITION | OBJECT | INTERFACE | UNION | ARGUMENT_DEFINITION | SCALAR | ENUM | ENUM_VALUE | INPUT_OBJECT | INPUT_FIELD_DEFINITION
directive @tag(name: String!) repeatable on FIELD_DEFINITION | OBJECT | INTERFACE | UNION | ARGUMENT_DEFINITION | SCALAR | ENUM | ENUM_VALUE | INPUT_OBJECT | INPUT_FIELD_DEFINITION
directive @interfaceObject on OBJECT
directive @composeDirective(name: String!) repeatable on SCHEMA
directive @link(url: String!, as: String, for: link__Purpose, import: [link__Import]) repeatable on SCHEMA
scalar FieldSet
scalar link__Import
enum link__Purpose {
  SECURITY
  EXECUTION
}
"""

SUPERGRAPH_PRELUDE_SDL = """
directive @join__enumValue(graph: join__Graph!) repeatable on ENUM_VALUE
directive @join__field(graph: join__Graph, requires: join__FieldSet, provides: join__FieldSet, type: String, external: Boolean, override: String, usedOverridden: Boolean) repeatable on FIELD_DEFINITION | INPUT_FIELD_DEFINITION
directive @join__graph(name: String!, url: String!) on ENUM_VALUE
directive @join__implements(graph: join__Graph!, interface: String!) repeatable on OBJECT | INTERFACE
directive @join__type(graph: join__Graph!, key: join__FieldSet, extension: Boolean! = false, resolvable: Boolean! = true, isInterfaceObject: Boolean! = false) repeatable on OBJECT | INTERFACE | UNION | ENUM | INPUT_OBJECT | SCALAR
directive @join__unionMember(graph: join__Graph!, member: String!) repeatable on UNION
directive @link(url: String, as: String, for: link__Purpose, import: [link__Import]) repeatable on SCHEMA
scalar join__FieldSet
scalar link__Import
enum link__Purpose {
  \"\"\"
  `SECURITY` features provide metadata necessary to securely resolve fields.
  \"\"\"
  SECURITY

  \"\"\"
  `EXECUTION` features provide metadata necessary for operation execution.
  \"\"\"
  EXECUTION
}
"""

# Directives owned by federation; their usages never reach the supergraph
FEDERATION_DIRECTIVES = frozenset(
    {
        "key",
        "shareable",
        "external",
        "requires",
        "provides",
        "extends",
        "override",
        "inaccessible",
        "tag",
        "interfaceObject",
        "composeDirective",
        "link",
    }
)

# Types and root fields a service may declare for its own runtime, rebuilt by federation
FEDERATION_TYPES = frozenset({"_Any", "_Entity", "_Service", "FieldSet", "_FieldSet", "link__Import", "link__Purpose"})
FEDERATION_QUERY_FIELDS = frozenset({"_entities", "_service"})


@cache
def federation_prelude() -> tuple[DefinitionNode, ...]:
    return tuple(parse(FEDERATION_PRELUDE_SDL, no_location=True).definitions)


@cache
def supergraph_prelude() -> tuple[DefinitionNode, ...]:
    return tuple(parse(SUPERGRAPH_PRELUDE_SDL, no_location=True).definitions)


@cache
def link_prelude() -> tuple[DefinitionNode, ...]:
    """The @link directive and the types its arguments use, as a service declares them."""
    names = {"link", "link__Import", "link__Purpose"}
    return tuple(definition for definition in federation_prelude() if definition.name.value in names)
