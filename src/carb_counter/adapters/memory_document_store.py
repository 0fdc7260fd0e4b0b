"""In-memory implementation of the document store."""

from dataclasses import dataclass, field

from carb_counter.services.persistence import DocumentStore


@dataclass
class InMemoryDocumentStore(DocumentStore):
    """Dict-backed store; documents live as long as the process."""

    documents: dict[str, str] = field(default_factory=dict)

    def read(self, key: str) -> str | None:
        return self.documents.get(key)

    def write(self, key: str, text: str) -> None:
        self.documents[key] = text
