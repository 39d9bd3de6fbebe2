"""
Scripts Module - Black Box Interface

Purpose: Generate Groovy for the Jenkins script console
Interface: groovy_list(), gencode_*() per node operation
Hidden: Template text, placeholder rendering, status check ordering

Generators are pure functions; nothing here talks to a server.
"""

from .groovy import (
    STATUS_FALLBACK,
    STATUS_CHECKS,
    gencode_connect_nodes,
    gencode_disconnect_nodes,
    gencode_list_nodes,
    gencode_node_labels,
    gencode_node_status,
    gencode_offline_nodes,
    gencode_online_nodes,
    groovy_list,
    split_node_names,
)

__all__ = [
    "STATUS_FALLBACK",
    "STATUS_CHECKS",
    "gencode_connect_nodes",
    "gencode_disconnect_nodes",
    "gencode_list_nodes",
    "gencode_node_labels",
    "gencode_node_status",
    "gencode_offline_nodes",
    "gencode_online_nodes",
    "groovy_list",
    "split_node_names",
]
