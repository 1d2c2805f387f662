"""Field schema registry built once at application startup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from restsite.exceptions import RegistryFrozenError, SchemaConflictError
from restsite.fields.schema import (
    FieldKind,
    FieldSchema,
    GroupField,
    GroupOptions,
    PageTemplate,
    ScalarField,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from restsite.fields.schema import FieldDefinition

logger = logging.getLogger(__name__)

HOME_TEMPLATE = "home"
ABOUT_TEMPLATE = "about"
DEFAULT_TEMPLATE = "index"


class SchemaRegistry:
    """Maps template ids to their page template and field schema.

    Schemas are defined during startup, then the registry is frozen and
    shared read-only by every request.
    """

    def __init__(self) -> None:
        self._templates: dict[str, PageTemplate] = {}
        self._schemas: dict[str, FieldSchema] = {}
        self._frozen = False

    def define_schema(
        self,
        template_id: str,
        fields: Iterable[FieldDefinition],
        *,
        name: str | None = None,
        schema_id: str | None = None,
        title: str | None = None,
    ) -> FieldSchema:
        """Register the field schema for pages using ``template_id``.

        Defining the same schema twice is a no-op.  A second definition with
        different fields raises ``SchemaConflictError``.
        """
        if self._frozen:
            msg = f"Cannot define schema for '{template_id}': registry is frozen"
            raise RegistryFrozenError(msg)

        schema = FieldSchema(
            schema_id=schema_id or f"{template_id}_metabox",
            title=title or template_id.title(),
            fields=tuple(fields),
        )
        template = PageTemplate(
            template_id=template_id,
            name=name or template_id.title(),
            schema_id=schema.schema_id,
        )

        existing = self._schemas.get(schema.schema_id)
        if existing is not None:
            if existing == schema and self._templates.get(template_id) == template:
                logger.debug("Schema %s already registered", schema.schema_id)
                return existing
            msg = f"Conflicting definition for schema '{schema.schema_id}'"
            raise SchemaConflictError(msg)
        if template_id in self._templates:
            msg = f"Template '{template_id}' already has a schema"
            raise SchemaConflictError(msg)

        self._schemas[schema.schema_id] = schema
        self._templates[template_id] = template
        logger.debug(
            "Registered schema %s for template %s (%d fields)",
            schema.schema_id,
            template_id,
            len(schema.fields),
        )
        return schema

    def freeze(self) -> SchemaRegistry:
        self._frozen = True
        return self

    def schema_for(self, template_id: str) -> FieldSchema | None:
        """Return the schema for a template id, or None if it declares no fields."""
        template = self._templates.get(template_id)
        if template is None:
            return None
        return self._schemas[template.schema_id]


def build_registry() -> SchemaRegistry:
    """Build the frozen registry with the site's page schemas."""
    registry = SchemaRegistry()
    registry.define_schema(
        HOME_TEMPLATE,
        [
            ScalarField("dish-of-day-name", "Prato do dia"),
            ScalarField("description", "Descrição", FieldKind.LONG_TEXT),
            GroupField(
                "dishes",
                "Pratos",
                fields=(
                    ScalarField("name", "Nome"),
                    ScalarField("description", "Descrição", FieldKind.LONG_TEXT),
                    ScalarField("price", "Preço"),
                ),
                options=GroupOptions(
                    group_title="Prato {#}",
                    add_button="Adicionar prato",
                    repeatable=True,
                    sortable=True,
                ),
            ),
        ],
        name="Menu da Semana",
        title="Menu da Semana",
    )
    registry.define_schema(
        ABOUT_TEMPLATE,
        [
            ScalarField("photo", "Foto do restaurante", FieldKind.FILE),
            ScalarField("historia", "História", FieldKind.LONG_TEXT),
        ],
        name="Sobre",
        title="Sobre",
    )
    return registry.freeze()
