"""Scene materializer — bind a scene's props into its template blueprint."""

from __future__ import annotations

import logging
import re
from typing import Any

from pydantic import ValidationError

from .catalog import SceneTemplate, TemplateCatalog, default_catalog
from .models.composition import MaterializedScene
from .models.props import PROPS_BY_CATEGORY, BackgroundProps
from .models.structure import TemplateScene

logger = logging.getLogger(__name__)

SCENE_NAME_PLACEHOLDER = "SCENE_NAME"

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


class SceneMaterializer:
    """Turn validated ``TemplateScene`` entries into renderable scene specs.

    A blueprint leaf that is exactly ``"{features}"`` receives the structured
    value (list or object); a placeholder embedded in longer text receives
    its string form.
    """

    def __init__(self, catalog: TemplateCatalog | None = None) -> None:
        self.catalog = catalog or default_catalog()

    def resolve_props(self, scene: TemplateScene, template: SceneTemplate) -> dict[str, Any]:
        """Fill missing required props, then shape them through the category's props model."""
        props = dict(scene.props)
        for name in template.required_props:
            if props.get(name) in (None, ""):
                props[name] = self.catalog.default_prop(name)

        variant = PROPS_BY_CATEGORY.get(template.category, BackgroundProps)
        try:
            typed = variant.model_validate(props)
        except ValidationError as exc:
            logger.warning(
                "Props for %s did not fit %s, using catalog defaults: %s",
                template.id, variant.__name__, exc.error_count(),
            )
            typed = variant.model_validate(
                {name: self.catalog.default_prop(name) for name in template.required_props}
            )
        return typed.model_dump(mode="json", by_alias=True, exclude={"kind"}, exclude_none=True)

    def _bind(self, node: Any, values: dict[str, Any]) -> Any:
        if isinstance(node, dict):
            return {key: self._bind(value, values) for key, value in node.items()}
        if isinstance(node, list):
            return [self._bind(item, values) for item in node]
        if not isinstance(node, str):
            return node

        whole = _PLACEHOLDER.fullmatch(node)
        if whole:
            return self._lookup(whole.group(1), values)
        return _PLACEHOLDER.sub(lambda m: str(self._lookup(m.group(1), values)), node)

    def _lookup(self, name: str, values: dict[str, Any]) -> Any:
        if name in values:
            return values[name]
        return self.catalog.default_prop(name)

    def materialize(
        self,
        scene: TemplateScene,
        template: SceneTemplate | None = None,
        scene_name: str = "Scene1",
    ) -> MaterializedScene:
        """Bind *scene* into its blueprint under component name *scene_name*.

        Raises:
            UnknownTemplateError: If *template* is omitted and the scene's id
                is not in the catalog.
        """
        template = template or self.catalog.get(scene.template_id)
        props = self.resolve_props(scene, template)
        values = {**props, SCENE_NAME_PLACEHOLDER: scene_name}
        return MaterializedScene(
            scene_name=scene_name,
            template_id=template.id,
            duration_in_frames=scene.duration_in_frames,
            props=props,
            render_spec=self._bind(template.blueprint, values),
        )
