from bootgather.state.terraform import (
    STATE_FILE_NAME,
    Resource,
    ResourceInstance,
    TerraformState,
    read_state,
    state_path,
)

__all__ = [
    "STATE_FILE_NAME",
    "Resource",
    "ResourceInstance",
    "TerraformState",
    "read_state",
    "state_path",
]
