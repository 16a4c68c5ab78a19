"""ReqBodyHash — hash the final request body into request fields.

The host loads ``template_tags`` and ``request_hooks`` from this module.
"""

from reqbodyhash.hooks.resolver import resolve_request_hashes
from reqbodyhash.tags.encoder import REQBODYHASH_TAG

__version__ = "0.1.0"

template_tags = [REQBODYHASH_TAG]

request_hooks = [resolve_request_hashes]
