"""
Nodebatch - Bulk Jenkins node administration

Runs connect, disconnect, online, offline, label, status and listing
operations against many Jenkins nodes in one request, by sending Groovy to
the server's script console instead of calling the remote API once per node.

Modules:
- scripts: Groovy generation per node operation
- router: Command verbs and routing to generators
- auth: Temporary netrc credentials and CSRF crumbs
- transport: HTTP delivery to the script console
"""

__version__ = "1.0.0"
