# config.py
"""Application configuration for the semantic file finder"""
import os
from typing import List, Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """
    Loads configuration from environment variables (prefix SFF_).
    A .env file in the working directory is read as well.
    """

    # Logger configuration
    LOGGER_NAME: str = "sff"
    LOG_FILE_PATH: Optional[str] = None

    # Embedding model
    EMBEDDING_MODEL_NAME: str = "minishlab/potion-retrieval-32M"
    NORMALIZE_EMBEDDINGS: bool = True

    # Chunking and batching
    WORD_CHUNK_SIZE: int = 20
    EMBEDDING_BATCH_SIZE: int = 128
    MAX_WORKERS: Optional[int] = None  # None -> os.cpu_count()

    # File discovery
    DEFAULT_EXTENSIONS: List[str] = ["txt", "md", "mdx", "org"]

    # Results
    DEFAULT_RESULT_LIMIT: int = 10
    MAX_CHUNK_DISPLAY_LEN: int = 100
    PROGRESS_BAR_THRESHOLD: int = 10000

    # App metadata
    APP_TITLE: str = "sff: Fast semantic file finder"
    APP_VERSION: str = "0.3.0"

    @property
    def worker_count(self) -> int:
        return self.MAX_WORKERS or os.cpu_count() or 1

    class Config:
        env_prefix = "SFF_"
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
