"""Chat prompt payload sent to the completion endpoint."""

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class PromptPayload:
    """Static instruction segment plus the serialized profile content."""

    system: str
    user: str

    def to_messages(self) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": self.user},
        ]
