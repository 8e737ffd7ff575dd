"""ChromaDB vector store provider adapter.

Wraps a ChromaDB client to implement :class:`IVectorStoreProvider`.  A
remote server is used through ``chromadb.HttpClient`` when ``CHROMADB_HOST``
is set (the deployed function has no durable local disk); otherwise a local
``chromadb.PersistentClient`` is opened, which suits development and the CLI.

Construction does no I/O.  The client and collection are opened on the
first write, so an unreachable server fails the vector-store stage of the
pipeline, where the project row is compensated, and not client wiring.
"""

from __future__ import annotations

import os
from typing import Any

# ChromaDB reads this before its telemetry client is created.
os.environ["ANONYMIZED_TELEMETRY"] = "False"

import chromadb
import structlog

from rapport_vectorizer.config.settings import Settings
from rapport_vectorizer.interfaces.vector_store_provider import IVectorStoreProvider
from rapport_vectorizer.models.report import VectorRecord
from rapport_vectorizer.utils.errors import VectorStoreError

logger = structlog.get_logger(logger_name=__name__)


class ChromaDBProvider(IVectorStoreProvider):
    """Vector store provider backed by a single ChromaDB collection.

    Each report becomes one record: id ``<project_id>_<object_id>``, the
    resume as document, the resume embedding, and ``project_id`` /
    ``object_id`` as metadata.  Records are upserted, so re-uploading the
    same report replaces its previous vector.
    """

    def __init__(
        self,
        collection_name: str = "pfe_rapports",
        persist_directory: str = "./data/chromadb",
        host: str = "",
        port: int = 8000,
        ssl: bool = False,
        token: str = "",
        client: Any | None = None,
    ) -> None:
        self._collection_name = collection_name
        self._persist_directory = persist_directory
        self._host = host
        self._port = port
        self._ssl = ssl
        self._token = token
        self._client = client
        self._collection: Any | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> ChromaDBProvider:
        """Build the provider from ``CHROMADB_*`` settings."""
        return cls(
            collection_name=settings.chromadb_collection,
            persist_directory=settings.chromadb_persist_dir,
            host=settings.chromadb_host,
            port=settings.chromadb_port,
            ssl=settings.chromadb_ssl,
            token=settings.chromadb_token,
        )

    # ------------------------------------------------------------------
    # IVectorStoreProvider implementation
    # ------------------------------------------------------------------

    async def insert_record(self, record: VectorRecord) -> None:
        collection = self._get_collection()
        try:
            collection.upsert(
                ids=[record.record_id],
                embeddings=[record.vector],
                documents=[record.content],
                metadatas=[self._record_to_metadata(record)],
            )
        except Exception as exc:
            raise VectorStoreError(
                message=f"ChromaDB insert failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        logger.info(
            "chromadb_record_inserted",
            collection=self._collection_name,
            record_id=record.record_id,
            dimension=len(record.vector),
        )

    def get_provider_name(self) -> str:
        return "chromadb"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def count(self) -> int:
        """Number of records in the collection (operator and test helper)."""
        try:
            return self._get_collection().count()
        except VectorStoreError:
            raise
        except Exception as exc:
            raise VectorStoreError(
                message=f"ChromaDB count failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    def _get_collection(self) -> Any:
        if self._collection is not None:
            return self._collection

        location = f"{self._host}:{self._port}" if self._host else self._persist_directory
        try:
            if self._client is None:
                self._client = self._open_client()
            # Embeddings are always computed upstream, so no embedding
            # function is attached and ChromaDB never loads its default model.
            self._collection = self._client.get_or_create_collection(
                name=self._collection_name,
                metadata={"hnsw:space": "cosine"},
                embedding_function=None,
            )
        except Exception as exc:
            raise VectorStoreError(
                message=(
                    f"Cannot open ChromaDB collection '{self._collection_name}' "
                    f"at {location}: {exc}"
                ),
                provider_name=self.get_provider_name(),
            ) from exc

        logger.debug(
            "chromadb_collection_ready",
            collection=self._collection_name,
            location=location,
        )
        return self._collection

    def _open_client(self) -> Any:
        client_settings = chromadb.config.Settings(anonymized_telemetry=False)
        if self._host:
            headers = {"Authorization": f"Bearer {self._token}"} if self._token else None
            return chromadb.HttpClient(
                host=self._host,
                port=self._port,
                ssl=self._ssl,
                headers=headers,
                settings=client_settings,
            )
        return chromadb.PersistentClient(
            path=self._persist_directory,
            settings=client_settings,
        )

    @staticmethod
    def _record_to_metadata(record: VectorRecord) -> dict[str, str]:
        return {
            "project_id": record.project_id,
            "object_id": record.object_id,
        }
