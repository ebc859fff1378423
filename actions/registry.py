"""
Action registry - finds setup action classes by their description
"""
import importlib
import logging
import pkgutil
from typing import Dict, List, Type
from .base import Action
logger = logging.getLogger(__name__)

# Cache of discovered action classes, keyed by normalized description
_action_cache: Dict[str, Type[Action]] = {}


def _normalize(name: str) -> str:
    return " ".join(name.lower().replace("-", " ").replace("_", " ").split())


def _discover_actions() -> Dict[str, Type[Action]]:
    """
    Import every module of the actions package and index its Action subclasses
    Returns:
        Dictionary mapping normalized descriptions to action classes
    """
    if _action_cache:
        return _action_cache
    import actions
    for _, modname, ispkg in pkgutil.iter_modules(actions.__path__, actions.__name__ + "."):
        if ispkg or modname.endswith(".base") or modname.endswith(".registry"):
            continue
        try:
            module = importlib.import_module(modname)
        except ImportError as exc:
            logger.warning("Failed to import action module %s: %s", modname, exc)
            continue
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, type) and issubclass(attr, Action) and attr is not Action and attr.description:
                _action_cache[_normalize(attr.description)] = attr
    return _action_cache


def get_action_class(action_name: str) -> Type[Action]:
    """
    Get action class by name (case-insensitive, dashes/underscores/spaces interchangeable)
    Args:
        action_name: Action name from YAML (matches action.description)
    Returns:
        Action class
    Raises:
        ValueError: If action name not found
    """
    registry = _discover_actions()
    action_class = registry.get(_normalize(action_name))
    if action_class is not None:
        return action_class
    available = sorted(cls.description for cls in registry.values())
    raise ValueError(f"Action '{action_name}' not found. Available actions: {available}")


def resolve_actions(names: List[str]) -> List[Type[Action]]:
    """Resolve the configured action list, failing before anything runs if a name is unknown"""
    return [get_action_class(name) for name in names]
