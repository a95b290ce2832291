"""GraphQL documents and payload builders for metafield definition creation."""
from app.schemas.imports import MetafieldRow

OPERATION = "metafieldDefinitionCreate"

METAFIELD_DEFINITION_CREATE = """
mutation CreateMetafieldDefinition($definition: MetafieldDefinitionInput!) {
  metafieldDefinitionCreate(definition: $definition) {
    createdDefinition { id name key namespace }
    userErrors { field message code }
  }
}
"""


def build_definition_input(row: MetafieldRow, namespace: str, owner_type: str) -> dict:
    """Variables for METAFIELD_DEFINITION_CREATE.

    Values are sent as JSON variables, so they never touch the query text.
    """
    return {
        "definition": {
            "name": row.name,
            "namespace": namespace,
            "key": row.key,
            "type": row.type,
            "description": row.description,
            "ownerType": owner_type,
        }
    }


def escape_graphql_string(value: str) -> str:
    """Escape a value for a double-quoted GraphQL string literal."""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


def render_inline_mutation(row: MetafieldRow, namespace: str, owner_type: str) -> str:
    """Render the mutation with literal arguments, for dry-run previews."""
    fields = {
        "name": row.name,
        "namespace": namespace,
        "key": row.key,
        "type": row.type,
        "description": row.description,
    }
    args = " ".join(f'{k}: "{escape_graphql_string(v)}"' for k, v in fields.items())
    return (
        f"mutation {{ {OPERATION}(definition: {{ {args} ownerType: {owner_type} }}) "
        "{ createdDefinition { id name key } userErrors { message } } }"
    )
