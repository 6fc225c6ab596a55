"""JSON export of the records currently on display.

Why JSON:
- Interoperability with other tools and pipelines.
- Shows exactly which records (and which lazily attached comments) the
  session holds, independent of the HTML rendering.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.domain.view_state import CommentsState
from core.services.controller import InteractionController


def document_payload(controller: InteractionController) -> dict[str, Any]:
    """Records per section, in display order, with their API field names."""

    payload: dict[str, Any] = {}
    for section, container in controller.document.containers.items():
        records = [controller.view_model[node_id] for node_id in container.node_ids()]
        payload[section.value] = [
            record.model_dump(mode="json", by_alias=True) for record in records
        ]
    active = controller.document.active_section
    payload["active_section"] = active.value if active is not None else None
    payload["expanded_posts"] = sorted(
        node_id
        for node_id, view in controller.post_views.items()
        if view.state is CommentsState.EXPANDED
    )
    return payload


def export_document_json(*, controller: InteractionController, output_path: Path) -> Path:
    """Write the payload as UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = document_payload(controller)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
