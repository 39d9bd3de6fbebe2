"""
Router Module - Black Box Interface

Purpose: Turn a command verb and node list into a Groovy script
Interface: Verb, NodeOperationRequest, generate_script()
Hidden: Routing table, verb normalization

Unknown verbs raise UnrecognizedCommandError; callers decide how to report it.
"""

from .router import ROUTES, NodeOperationRequest, Verb, generate_script

__all__ = ["ROUTES", "NodeOperationRequest", "Verb", "generate_script"]
