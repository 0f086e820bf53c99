"""
Key Scheme

Composite keys are built as
    \\x00 + objectType + \\x00 + attr1 + \\x00 + attr2 + \\x00 ...
Every entity kind has its own object type, so keys of different kinds never
collide, and all contributions of a project share the prefix of a partial key.
"""

from crowdfunding_contracts.errors import InvalidArgumentError


################################################
# Constants
################################################
COMPOSITE_KEY_NAMESPACE = "\x00"
MIN_UNICODE_RUNE_VALUE = "\x00"
MAX_UNICODE_RUNE_VALUE = "\U0010ffff"

PROJECT_OBJECT_TYPE = "Project"
USER_OBJECT_TYPE = "User"
CONTRIBUTION_OBJECT_TYPE = "Contribution"
REWARD_OBJECT_TYPE = "Reward"
REWARD_ASSIGNMENT_OBJECT_TYPE = "RewardAssignment"


def _validate_component(component: str, name: str) -> None:
    if not isinstance(component, str) or component == "":
        raise InvalidArgumentError(f"{name} must be a non-empty string")
    if MIN_UNICODE_RUNE_VALUE in component or MAX_UNICODE_RUNE_VALUE in component:
        raise InvalidArgumentError(f"{name} contains a reserved character: {component!r}")


def create_composite_key(object_type: str, attributes: list[str]) -> str:
    """
    Build a composite key

    Args:
        object_type: Entity kind
        attributes: Ordered identifying attributes (may be a prefix of them)

    Returns:
        Composite key string

    Raises:
        InvalidArgumentError: If a component is empty or holds a reserved rune
    """
    _validate_component(object_type, "object type")
    key = COMPOSITE_KEY_NAMESPACE + object_type + MIN_UNICODE_RUNE_VALUE
    for attribute in attributes:
        _validate_component(attribute, "key attribute")
        key += attribute + MIN_UNICODE_RUNE_VALUE
    return key


def is_composite_key(key: str) -> bool:
    return key.startswith(COMPOSITE_KEY_NAMESPACE)


def split_composite_key(composite_key: str) -> tuple[str, list[str]]:
    """Split a composite key into its object type and attributes"""
    if not is_composite_key(composite_key):
        raise InvalidArgumentError(f"not a composite key: {composite_key!r}")
    components = composite_key[1:].split(MIN_UNICODE_RUNE_VALUE)
    # trailing separator leaves an empty last component
    if len(components) < 2 or components[-1] != "":
        raise InvalidArgumentError(f"malformed composite key: {composite_key!r}")
    return components[0], components[1:-1]


# ============================================================================
# Entity keys
# ============================================================================


def project_key(project_id: str) -> str:
    return create_composite_key(PROJECT_OBJECT_TYPE, [project_id])


def user_key(user_id: str) -> str:
    return create_composite_key(USER_OBJECT_TYPE, [user_id])


def contribution_key(project_id: str, contributor_id: str) -> str:
    return create_composite_key(CONTRIBUTION_OBJECT_TYPE, [project_id, contributor_id])


def reward_key(project_id: str, reward_level: str) -> str:
    return create_composite_key(REWARD_OBJECT_TYPE, [project_id, reward_level])


def reward_assignment_key(project_id: str, contributor_id: str) -> str:
    return create_composite_key(REWARD_ASSIGNMENT_OBJECT_TYPE, [project_id, contributor_id])
