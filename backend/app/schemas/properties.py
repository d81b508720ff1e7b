"""
Device Registry Backend — Raw JSON Value
==========================================

What:  Wrapper for a device's additional-properties text.
Why:   The text is accepted and stored verbatim, and only decoded when a
       device detail is read. Keeping it as "text plus decode()" makes the
       one place that can fail explicit.
How:   decode() parses with the stdlib json module; malformed text raises
       PayloadDecodeError instead of a bare ValueError.
"""

import json
from dataclasses import dataclass
from typing import Any

from app.exceptions import PayloadDecodeError


@dataclass(frozen=True)
class RawJson:
    text: str

    def decode(self) -> Any:
        """Returns the decoded JSON value (dict, list, str, number, bool or None)."""
        try:
            return json.loads(self.text)
        except (TypeError, ValueError) as e:
            raise PayloadDecodeError(
                message=str(e),
                context={"length": len(self.text) if self.text else 0},
            ) from e
