"""Navigation script loader from YAML files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from navperf.exceptions import ScriptError


class NativeMarkDefinition(BaseModel):
    """A platform mark reported before the app starts."""

    name: str = Field(..., min_length=1)
    at: float = Field(default=0.0, ge=0.0, description="Timestamp in ms")


class StepDefinition(BaseModel):
    """One navigation step: go somewhere, then let time pass."""

    goTo: str | None = Field(default=None, description="Destination screen")
    params: dict[str, Any] = Field(default_factory=dict)
    wait: float = Field(default=0.0, ge=0.0, description="Milliseconds to advance")

    @model_validator(mode="after")
    def _checkAction(self) -> "StepDefinition":
        if not self.goTo and self.wait <= 0:
            raise ValueError("step needs 'goTo' or a positive 'wait'")
        return self


class NavigationScript(BaseModel):
    """Navigation script loaded from YAML."""

    name: str
    description: str = ""
    initialScreen: str | None = None
    homeScreen: str | None = None
    viewportWidth: float = Field(default=390.0, ge=0.0)
    resourceLogging: bool = False
    interactiveAt: float = Field(
        default=0.0,
        ge=0.0,
        description="Milliseconds after launch when the app becomes interactive",
    )
    nativeMarks: list[NativeMarkDefinition] = Field(default_factory=list)
    steps: list[StepDefinition] = Field(default_factory=list)

    # Metadata
    version: str = "1.0"
    tags: list[str] = Field(default_factory=list)


EXAMPLE_SCRIPT = NavigationScript(
    name="grade-tour",
    description="Leave home for grade 1, hop to grade 2, then come back",
    initialScreen="home",
    viewportWidth=390,
    interactiveAt=850,
    nativeMarks=[
        NativeMarkDefinition(name="nativeLaunchStart", at=0),
        NativeMarkDefinition(name="nativeLaunchEnd", at=320),
        NativeMarkDefinition(name="runJsBundleStart", at=330),
        NativeMarkDefinition(name="runJsBundleEnd", at=610),
    ],
    steps=[
        StepDefinition(goTo="grade1", wait=400),
        StepDefinition(goTo="grade2", wait=50),
        StepDefinition(goTo="home", wait=100),
        StepDefinition(goTo="grade2Set", params={"setNumber": 2}, wait=400),
    ],
)


class ScriptLoader:
    """Loads and writes navigation scripts."""

    def loadFromPath(self, scriptPath: Path | str) -> NavigationScript:
        """Load a navigation script from a YAML file.

        Args:
            scriptPath: Path to the script.

        Returns:
            NavigationScript instance.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ScriptError: If the YAML or its content is invalid.
        """
        scriptPath = Path(scriptPath)

        if not scriptPath.exists():
            raise FileNotFoundError(f"Script not found at {scriptPath}")

        with open(scriptPath, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ScriptError(str(scriptPath), f"invalid YAML: {e}") from e

        return self.loadFromDict(data, source=str(scriptPath))

    def loadFromDict(self, data: Any, source: str = "<dict>") -> NavigationScript:
        """Validate script data.

        Raises:
            ScriptError: If the data is not a valid script.
        """
        if not isinstance(data, dict):
            raise ScriptError(source, "expected a mapping at the top level")

        try:
            return NavigationScript(**data)
        except ValidationError as e:
            raise ScriptError(source, str(e)) from e

    def save(self, script: NavigationScript, scriptPath: Path | str) -> Path:
        """Write a script as YAML.

        Raises:
            FileExistsError: If the file already exists.
        """
        scriptPath = Path(scriptPath)

        if scriptPath.exists():
            raise FileExistsError(f"Script already exists at {scriptPath}")

        scriptPath.parent.mkdir(parents=True, exist_ok=True)
        with open(scriptPath, "w", encoding="utf-8") as f:
            yaml.dump(
                script.model_dump(exclude_none=True),
                f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )

        return scriptPath
