"""
Groovy script generation for bulk node operations.

Each generator is a pure function returning the text of a Groovy script that
the Jenkins script console evaluates in the context of the running server.
The scripts iterate over ``hudson.model.Hudson.instance.slaves`` (the server's
canonical node enumeration) and filter it down to the requested names, so all
per-node output follows that order rather than completion order.
"""

import re
from typing import Dict, Iterable, List, Tuple, Union

NodeNames = Union[str, Iterable[str]]

# Check order decides the reported state; the first true check wins.
STATUS_CHECKS: Tuple[Tuple[str, str], ...] = (
    ("isOnline", "online"),
    ("isTemporarilyOffline", "offline"),
    ("isConnecting", "connecting"),
)
STATUS_FALLBACK = "disconnected"


def split_node_names(nodes: NodeNames) -> List[str]:
    """
    Normalize node names into a flat list.

    Accepts a whitespace-delimited string or any iterable of strings; every
    element is split on whitespace, order and duplicates are preserved.
    """
    if isinstance(nodes, str):
        return nodes.split()
    return [name for item in nodes for name in item.split()]


def groovy_list(nodes: NodeNames) -> str:
    """
    Encode node names as a Groovy list literal.

    Example:
        >>> groovy_list(["alice", "bob"])
        "[ 'alice', 'bob' ]"
        >>> groovy_list([])
        '[]'
    """
    names = split_node_names(nodes)
    if not names:
        return "[]"
    return "[ " + ", ".join(f"'{name}'" for name in names) + " ]"


def _render(content: str, values: Dict[str, str]) -> str:
    """Render {{var}} placeholders using a simple replacement."""
    return re.sub(r"\{\{([^}]+)\}\}", lambda m: values.get(m.group(1).strip(), m.group(0)), content)


_FUTURES_TEMPLATE = """\
def nodeNames = {{node_names}};
def futures = [:];

for (slave in hudson.model.Hudson.instance.slaves)
{
  if (nodeNames.contains(slave.name))
  {
    def computer = slave.getComputer();
    def future = {{dispatch}};
    futures[(slave.name)] = future;
  }
}

futures.each
{ name, future ->
    try {
        future.get();
        println('{{operation}} operation for ' + name + ' complete');
    }
    catch (java.util.concurrent.ExecutionException ex)
    {
        println('Exception waiting for ' + name + ': ' + ex.getCause());
    }
}
"""

_TWO_PHASE_TEMPLATE = """\
def nodeNames = {{node_names}};

// Mark {{state}} the nodes requested all at once; this is asynchronous
for (slave in hudson.model.Hudson.instance.slaves)
{
  if (nodeNames.contains(slave.name))
  {
    def computer = slave.getComputer();
    if (computer.{{skip_unless}}())
    {
      computer.{{action}};
    }
  }
}

// Now verify, synchronously, that each node is {{state}}
for (slave in hudson.model.Hudson.instance.slaves)
{
  if (nodeNames.contains(slave.name))
  {
    slave.getComputer().{{wait}}();
    println('Confirmed ' + slave.name + ' is {{state}}.');
  }
}
"""

_LABELS_ALL_TEMPLATE = """\
for (slave in hudson.model.Hudson.instance.slaves)
{
  println(slave.name + ': ' + slave.getLabelString());
}
"""

_LABELS_FILTERED_TEMPLATE = """\
def nodeNames = {{node_names}};

for (slave in hudson.model.Hudson.instance.slaves)
{
  if (nodeNames.contains(slave.name))
  {
    println(slave.name + ': ' + slave.getLabelString());
  }
}
"""

_STATUS_TEMPLATE = """\
def node_status_desired(nodename, desiredList)
{
    if (desiredList.size == 0)
        return true;
    if (desiredList.contains(nodename))
        return true;
    return false;
}

def nodeNames = {{node_names}};

for (slave in hudson.model.Hudson.instance.slaves)
{
    if (! node_status_desired(slave.name, nodeNames))
        continue;

    def computer = slave.getComputer();
    print(slave.name + ': ');
{{checks}}
}
"""

_LIST_TEMPLATE = """\
for (slave in hudson.model.Hudson.instance.slaves)
{
    println(slave.name);
}
"""


def _status_chain() -> str:
    lines = []
    for index, (check, state) in enumerate(STATUS_CHECKS):
        keyword = "if" if index == 0 else "else if"
        lines.append(f"    {keyword} (computer.{check}())")
        lines.append("    {")
        lines.append(f"        print('{state}\\n');")
        lines.append("    }")
    lines.append("    else")
    lines.append("    {")
    lines.append(f"        print('{STATUS_FALLBACK}\\n');")
    lines.append("    }")
    return "\n".join(lines)


def gencode_connect_nodes(nodes: NodeNames) -> str:
    """Connect and launch the agent on every requested node, then wait for each."""
    return _render(
        _FUTURES_TEMPLATE,
        {
            "node_names": groovy_list(nodes),
            "dispatch": "computer.connect(false)",
            "operation": "Connect",
        },
    )


def gencode_disconnect_nodes(nodes: NodeNames, username: str) -> str:
    """Disconnect every requested node, recording who asked for it."""
    cause = f'new hudson.slaves.OfflineCause.ByCLI("Disconnected by {username}")'
    return _render(
        _FUTURES_TEMPLATE,
        {
            "node_names": groovy_list(nodes),
            "dispatch": f"computer.disconnect({cause})",
            "operation": "Disconnect",
        },
    )


def gencode_online_nodes(nodes: NodeNames) -> str:
    """
    Mark requested nodes online, then block until each one reports online.

    The confirmation wait has no timeout; a node that never comes back keeps
    the script running.
    """
    return _render(
        _TWO_PHASE_TEMPLATE,
        {
            "node_names": groovy_list(nodes),
            "state": "online",
            "skip_unless": "isOffline",
            "action": "cliOnline()",
            "wait": "waitUntilOnline",
        },
    )


def gencode_offline_nodes(nodes: NodeNames, username: str) -> str:
    """Mirror of :func:`gencode_online_nodes` with an offline cause naming the user."""
    return _render(
        _TWO_PHASE_TEMPLATE,
        {
            "node_names": groovy_list(nodes),
            "state": "offline",
            "skip_unless": "isOnline",
            "action": f'cliOffline("Offlined by {username}")',
            "wait": "waitUntilOffline",
        },
    )


def gencode_node_labels(nodes: NodeNames) -> str:
    """Print ``<name>: <labels>`` for the requested nodes, or all nodes when none are given."""
    names = split_node_names(nodes)
    if not names:
        return _LABELS_ALL_TEMPLATE
    return _render(_LABELS_FILTERED_TEMPLATE, {"node_names": groovy_list(names)})


def gencode_node_status(nodes: NodeNames) -> str:
    """Print ``<name>: <state>`` for the requested nodes, or all nodes when none are given."""
    return _render(
        _STATUS_TEMPLATE,
        {"node_names": groovy_list(nodes), "checks": _status_chain()},
    )


def gencode_list_nodes() -> str:
    return _LIST_TEMPLATE
