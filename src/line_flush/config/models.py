from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Config models map YAML sections to typed structures.


class WriterConfig(BaseModel):
    # Forwarder behaviour shared by every source.
    model_config = ConfigDict(extra="forbid")
    ensure_trailing_newline: bool = False
    terminator: str = "\n"
    chunk_size: int = Field(default=4096, gt=0)

    @field_validator("terminator")
    @classmethod
    def _non_empty_terminator(cls, value: str) -> str:
        if not value:
            raise ValueError("writer.terminator must be a non-empty string")
        return value

    @property
    def terminator_bytes(self) -> bytes:
        return self.terminator.encode("utf-8")


class AdapterDecl(BaseModel):
    # Adapter selector: kind names a registered factory, settings are passed through unchanged.
    model_config = ConfigDict(extra="forbid")
    kind: str
    settings: dict[str, object] = Field(default_factory=dict)


class SourceConfig(BaseModel):
    # One input file merged into the shared output.
    model_config = ConfigDict(extra="forbid")
    path: str
    prefix: str = ""


class AppConfig(BaseModel):
    # AppConfig is the top-level typed view of configuration.
    model_config = ConfigDict(extra="forbid")
    version: int = 1
    writer: WriterConfig = Field(default_factory=WriterConfig)
    output: AdapterDecl = Field(default_factory=lambda: AdapterDecl(kind="stdout"))
    sources: list[SourceConfig] = Field(min_length=1)
    logging: AdapterDecl | None = None

    @field_validator("version")
    @classmethod
    def _supported_version(cls, value: int) -> int:
        if value != 1:
            raise ValueError(f"Unsupported config version: {value}")
        return value

    @property
    def logging_enabled(self) -> bool:
        # logging: null and logging.kind: none both disable diagnostics.
        return self.logging is not None and self.logging.kind != "none"

    @model_validator(mode="after")
    def _logs_stay_out_of_stdout_output(self) -> AppConfig:
        # Log records on the merged stdout stream would split its lines.
        if self.logging_enabled and self.logging is not None:
            if self.logging.kind == "stdout" and self.output.kind == "stdout":
                raise ValueError("logging.kind 'stdout' cannot share stdout with output.kind 'stdout'")
        return self
