"""
ReqBodyHash Example: Signing a Request Body
═══════════════════════════════════════════

Walks through the two phases a host goes through:
  1. Render time: the template tag emits placeholders
  2. Dispatch time: the request hook swaps them for digests of the final body

Run: python examples/sign_request.py
"""

import asyncio
import json
from pathlib import Path

# Add src to path for direct execution
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from reqbodyhash import request_hooks, template_tags
from reqbodyhash.host.request import HookContext, InMemoryRequest
from reqbodyhash.models import RequestField


async def main():
    tag = template_tags[0]
    print(f"🔐 {tag.display_name} — two-phase demo")
    print("=" * 50)

    # ─── Phase 1: render the template ───
    print("\n📝 Phase 1: rendering template tags...")

    body_hash = await tag.run(None, "sha256", "base64", True)
    order_hash = await tag.run(None, "md5", "hex", False, "$.order.id", "", "order:")
    literal = await tag.run(None, "sha1", "hex", False, "", "api-key-123")

    print(f"   body hash   → {body_hash[:60]}...")
    print(f"   order hash  → {order_hash[:60]}...")
    print(f"   literal     → {literal}")

    request = InMemoryRequest(
        body={"text": json.dumps({"order": {"id": 42, "items": [1, 2]}}, indent=2)},
        url=f"https://api.example.com/orders?sig={order_hash}",
        headers=[
            RequestField(name="Digest", value=f"SHA-256={body_hash}"),
            RequestField(name="X-Api-Key-Hash", value=literal),
        ],
    )

    # ─── Phase 2: dispatch ───
    print("\n🚀 Phase 2: running request hooks...")

    context = HookContext(request=request)
    for hook in request_hooks:
        await hook(context)

    print(json.dumps(request.to_dict(), indent=2))


if __name__ == "__main__":
    asyncio.run(main())
