"""Reconstruction of the transform hierarchy rooted in a scene."""

import logging
from typing import Any, Iterator, List, Sequence, Set

from scene.errors import CyclicHierarchy, FieldShapeMismatch
from scene.model import HierarchyNode, Record, SceneDocument
from exporters.text_exporter import to_dump
from .resolver import get_field, is_null_reference, resolve_reference, resolve_value


logger = logging.getLogger("scene_inspector.hierarchy")

SCENE_ROOTS = "SceneRoots"
ROOTS_FIELD = "m_Roots"
GAME_OBJECT_FIELD = "m_GameObject"
CHILDREN_FIELD = "m_Children"
NAME_FIELD = "m_Name"
FATHER_FIELD = "m_Father"
ROOT_ORDER_FIELD = "m_RootOrder"
PREFAB_INSTANCE = "PrefabInstance"
PREFAB_INSTANCE_FIELD = "m_PrefabInstance"
MODIFICATION_FIELD = "m_Modification"
TRANSFORM_PARENT_FIELD = "m_TransformParent"
TRANSFORM_TYPES = ("Transform", "RectTransform")

_DONE = object()


def scene_root_ids(document: SceneDocument) -> List[int]:
    """
    Return the anchor ids of the scene's top-level transforms, in order.

    Roots come from the ``m_Roots`` list of every ``SceneRoots`` record.
    Files written without a ``SceneRoots`` record fall back to transforms
    whose ``m_Father`` is the null reference and prefab instances whose
    ``m_TransformParent`` is, ordered by ``m_RootOrder``.
    """
    scene_roots = document.records_of_type(SCENE_ROOTS)
    if scene_roots:
        root_ids: List[int] = []
        for record in scene_roots:
            roots = record.get(ROOTS_FIELD)
            if roots is None or roots == "":
                continue
            if not isinstance(roots, list):
                raise FieldShapeMismatch(
                    f"{SCENE_ROOTS}.{ROOTS_FIELD} is not a sequence",
                    path=document.path,
                    anchor_id=record.anchor_id,
                )
            for value in roots:
                root_ids.append(resolve_value(document, record, value, ROOTS_FIELD).anchor_id)
        return root_ids

    orphans = [
        record for record in document.records_of_type(*TRANSFORM_TYPES)
        if GAME_OBJECT_FIELD in record and is_null_reference(record.get(FATHER_FIELD))
    ]
    orphans.extend(
        record for record in document.records_of_type(PREFAB_INSTANCE)
        if is_null_reference(_modification(record).get(TRANSFORM_PARENT_FIELD))
    )
    logger.debug("No %s record in %s, using %d parentless roots", SCENE_ROOTS, document.path, len(orphans))
    orphans.sort(key=_root_order)
    return [record.anchor_id for record in orphans]


def _root_order(record: Record) -> int:
    if record.type_name == PREFAB_INSTANCE:
        order = _override(record, ROOT_ORDER_FIELD)
    else:
        order = record.get(ROOT_ORDER_FIELD)
    if order is None:
        return record.position
    try:
        return int(order)
    except (TypeError, ValueError):
        return record.position


def _scalar_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise ValueError(f"expected a scalar, got {value!r}")
    return str(value)


def _modification(prefab: Record) -> dict:
    modification = prefab.get(MODIFICATION_FIELD)
    return modification if isinstance(modification, dict) else {}


def _override(prefab: Record, property_path: str) -> Any:
    """Value of the first scalar override of ``property_path``, or None."""
    overrides = _modification(prefab).get("m_Modifications")
    if isinstance(overrides, list):
        for override in overrides:
            if isinstance(override, dict) and override.get("propertyPath") == property_path:
                value = override.get("value")
                if not isinstance(value, (dict, list)):
                    return value
    return None


def _prefab_name(prefab: Record) -> str:
    """Name of a prefab instance, taken from its ``m_Name`` override."""
    name = _override(prefab, NAME_FIELD)
    if name is None:
        return prefab.type_name
    return _scalar_text(name)


def display_name(document: SceneDocument, transform: Record) -> str:
    """
    Resolve the name shown for a transform.

    Regular transforms are named after their game object's ``m_Name``.
    Prefab instances and the stripped transforms pointing at them use the
    instance's name override.

    Raises:
        FieldShapeMismatch: If the record carries no usable name source.
        DanglingReference: If a referenced record is not declared.
    """
    if GAME_OBJECT_FIELD in transform:
        game_object = resolve_reference(document, transform, GAME_OBJECT_FIELD)
        name = get_field(document, game_object, NAME_FIELD)
        try:
            return _scalar_text(name)
        except ValueError as e:
            raise FieldShapeMismatch(
                f"{game_object.type_name}.{NAME_FIELD}: {e}",
                path=document.path,
                anchor_id=game_object.anchor_id,
            ) from e

    if transform.type_name == PREFAB_INSTANCE:
        return _prefab_name(transform)

    if PREFAB_INSTANCE_FIELD in transform:
        prefab = resolve_reference(document, transform, PREFAB_INSTANCE_FIELD)
        return _prefab_name(prefab)

    raise FieldShapeMismatch(
        f"{transform.type_name} has no field {GAME_OBJECT_FIELD}",
        path=document.path,
        anchor_id=transform.anchor_id,
    )


def _enter(
    document: SceneDocument,
    transform: Record,
    depth: int,
    on_path: Set[int],
) -> HierarchyNode:
    if transform.anchor_id in on_path:
        raise CyclicHierarchy(
            "transform is its own ancestor",
            path=document.path,
            anchor_id=transform.anchor_id,
        )
    on_path.add(transform.anchor_id)
    return HierarchyNode(
        name=display_name(document, transform),
        anchor_id=transform.anchor_id,
        depth=depth,
    )


def _child_values(transform: Record) -> Iterator[Any]:
    children = transform.get(CHILDREN_FIELD)
    if isinstance(children, list):
        return iter(children)
    return iter(())


def _build_tree(document: SceneDocument, root: Record) -> HierarchyNode:
    """
    Build the tree below ``root`` depth first, without recursion.

    Each stack entry holds a node, its transform and the iterator over the
    transform's remaining children. ``on_path`` holds the anchors of the
    entries on the stack.
    """
    on_path: Set[int] = set()
    root_node = _enter(document, root, 0, on_path)
    stack = [(root_node, root, _child_values(root))]

    while stack:
        node, transform, pending = stack[-1]
        value = next(pending, _DONE)
        if value is _DONE:
            # Only ancestors count; the same transform may appear on other branches.
            on_path.discard(transform.anchor_id)
            stack.pop()
            continue

        child = resolve_value(document, transform, value, CHILDREN_FIELD)
        child_node = _enter(document, child, node.depth + 1, on_path)
        node.children.append(child_node)
        stack.append((child_node, child, _child_values(child)))

    return root_node


def build_hierarchy(document: SceneDocument, root_ids: Sequence[int]) -> List[HierarchyNode]:
    """
    Build one tree per root transform.

    Args:
        document: Loaded scene document.
        root_ids: Anchor ids of the root transforms, in display order.

    Returns:
        List of root nodes in the given order, children in file order.

    Raises:
        DanglingReference: If any reference points at an undeclared anchor.
        FieldShapeMismatch: If a reference field has the wrong shape.
        CyclicHierarchy: If a transform is reachable from itself.
    """
    return [_build_tree(document, document.get(anchor_id)) for anchor_id in root_ids]


def render_hierarchy(
    document: SceneDocument,
    root_ids: Sequence[int],
    marker: str = "--",
) -> str:
    """Build the hierarchy for ``root_ids`` and render it as indented text."""
    return to_dump(build_hierarchy(document, root_ids), marker=marker)
