"""
Input models for the bounce classifier.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class InitializeOptions(BaseModel):
    """
    Options accepted by ClassifierContext.initialize().

    model_path may be a local directory or an http(s) URL of a directory
    holding vocab.json, labels.json and weights.bin. Both snake_case and
    camelCase (modelPath) keys are accepted.
    """

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        frozen=True,
        protected_namespaces=(),
    )

    model_path: Optional[str] = Field(
        default=None,
        alias="modelPath",
        min_length=1,
        description="Directory or URL of the model bundle (defaults to settings.MODEL_PATH)",
    )
