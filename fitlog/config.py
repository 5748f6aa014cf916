from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the fitlog backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("FITLOG_DATA_ROOT") or data_root_default
        ).expanduser()
        self.logs_path: Path = Path(
            os.environ.get("FITLOG_LOGS_PATH") or (self.data_root / "daily_logs.json")
        ).expanduser()
        # Daily basal baseline added to calories out in the stats view.
        self.bmr_kcal: int = int(os.environ.get("FITLOG_BMR_KCAL") or "1700")
        self.log_level: str = (os.environ.get("FITLOG_LOG_LEVEL") or "INFO").upper()

        # Calorie estimation (OpenAI-compatible chat completions).
        self.qwen_api_key: str | None = os.environ.get("QWEN_API_KEY")
        self.qwen_base_url: str = os.environ.get(
            "QWEN_BASE_URL", "https://dashscope.aliyuncs.com/compatible-mode/v1"
        )
        self.qwen_model: str = os.environ.get("QWEN_MODEL", "qwen-plus")
        self.qwen_timeout: float = float(os.environ.get("QWEN_TIMEOUT", "30"))
        self.qwen_max_tokens: int = int(os.environ.get("QWEN_MAX_TOKENS", "128"))
        self.qwen_temperature: float = float(os.environ.get("QWEN_TEMPERATURE", "0.2"))

        cors = os.environ.get("FITLOG_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
