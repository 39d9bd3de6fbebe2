"""
Command router for node operations.

Maps one of the seven node verbs plus a node list to the Groovy generator
that implements it.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from nodebatch.errors import UnrecognizedCommandError
from nodebatch.modules.scripts import (
    gencode_connect_nodes,
    gencode_disconnect_nodes,
    gencode_list_nodes,
    gencode_node_labels,
    gencode_node_status,
    gencode_offline_nodes,
    gencode_online_nodes,
    split_node_names,
)

logger = logging.getLogger("nodebatch.router")


class Verb(str, Enum):
    """Node operations, spelled as on the command line."""

    CONNECT = "connect-nodes"
    DISCONNECT = "disconnect-nodes"
    ONLINE = "online-nodes"
    OFFLINE = "offline-nodes"
    LABELS = "node-labels"
    STATUS = "node-status"
    LIST = "list-nodes"

    @classmethod
    def parse(cls, raw: Union[str, "Verb"]) -> "Verb":
        """
        Resolve a verb case-insensitively.

        Raises:
            UnrecognizedCommandError: If the verb is not one of the known commands
        """
        if isinstance(raw, cls):
            return raw
        command = str(raw).lower()
        try:
            return cls(command)
        except ValueError:
            raise UnrecognizedCommandError(command) from None

    @property
    def needs_actor(self) -> bool:
        """Whether the generated script records who asked for the change."""
        return self in (Verb.DISCONNECT, Verb.OFFLINE)


class NodeOperationRequest(BaseModel):
    """A single bulk operation against a set of nodes."""

    verb: Verb
    nodes: List[str] = Field(default_factory=list, description="Target node names, in order")
    actor: Optional[str] = Field(None, description="User recorded in offline/disconnect causes")

    @field_validator("verb", mode="before")
    @classmethod
    def parse_verb(cls, v):
        return Verb.parse(v)

    @field_validator("nodes", mode="before")
    @classmethod
    def split_nodes(cls, v):
        if v is None:
            return []
        return split_node_names(v)

    @model_validator(mode="after")
    def require_actor(self) -> "NodeOperationRequest":
        if self.verb.needs_actor and not self.actor:
            raise ValueError(f"{self.verb.value} requires an acting username")
        return self

    def to_script(self) -> str:
        """Generate the Groovy script for this request."""
        script = ROUTES[self.verb](self)
        logger.debug(f"Generated {len(script)} characters of Groovy for {self.verb.value}")
        return script


ROUTES: Dict[Verb, Callable[[NodeOperationRequest], str]] = {
    Verb.CONNECT: lambda r: gencode_connect_nodes(r.nodes),
    Verb.DISCONNECT: lambda r: gencode_disconnect_nodes(r.nodes, r.actor),
    Verb.ONLINE: lambda r: gencode_online_nodes(r.nodes),
    Verb.OFFLINE: lambda r: gencode_offline_nodes(r.nodes, r.actor),
    Verb.LABELS: lambda r: gencode_node_labels(r.nodes),
    Verb.STATUS: lambda r: gencode_node_status(r.nodes),
    # list-nodes takes no filter; any supplied names are ignored
    Verb.LIST: lambda r: gencode_list_nodes(),
}


def generate_script(
    verb: Union[str, Verb],
    nodes: Union[str, Iterable[str]] = (),
    actor: Optional[str] = None,
) -> str:
    """
    Route a verb and node list to its Groovy script.

    Args:
        verb: Command name, matched case-insensitively
        nodes: Node names (each element may hold several whitespace-separated names)
        actor: Invoking username, required for disconnect and offline

    Returns:
        Groovy script text

    Raises:
        UnrecognizedCommandError: If the verb is unknown
    """
    request = NodeOperationRequest(verb=Verb.parse(verb), nodes=nodes, actor=actor)
    return request.to_script()
