"""Pydantic configuration models for typolink.

Field aliases mirror the TypoScript option names, so a configuration array
can be validated as-is:

    LinkConfig.model_validate({"parameter": "typo3.org", "extTarget": "_blank"})

Keys ending in a dot (``parameter.``) hold stdWrap sub-configurations that
are evaluated before the plain value is used.
"""

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from .link import ObfuscationVector

StdWrapConfig = dict[str, Any]


class LinkConfig(BaseModel):
    """Declarative description of a single link."""

    parameter: str = Field("", description="Typolink parameter: target [window] [class] [\"title\"] [params]")
    parameter_wrap: Optional[StdWrapConfig] = Field(None, alias="parameter.")
    atag_params: str = Field("", alias="ATagParams", description="Extra anchor attributes, e.g. 'class=\"x\"'")
    atag_params_wrap: Optional[StdWrapConfig] = Field(None, alias="ATagParams.")
    ext_target: Optional[str] = Field(None, alias="extTarget", description="Target for external urls")
    file_target: Optional[str] = Field(None, alias="fileTarget", description="Target for file links")
    target: Optional[str] = Field(None, description="Target for page and telephone links")
    title: Optional[str] = Field(None, description="Title attribute, overrides the parameter title")
    title_wrap: Optional[StdWrapConfig] = Field(None, alias="title.")
    jswindow: bool = Field(False, alias="JSwindow", description="Open the link in a pop-up window")
    jswindow_params: str = Field("", alias="JSwindow_params", description="Default pop-up window features")
    additional_params: str = Field("", alias="additionalParams", description="Query string appended to the href")
    return_last: Optional[Literal["url", "result"]] = Field(
        None,
        alias="returnLast",
        description="Return the bare url or the structured result instead of markup",
    )
    direct_image_link: bool = Field(False, alias="directImageLink")

    model_config = {"extra": "forbid", "populate_by_name": True, "frozen": True, "coerce_numbers_to_str": True}


class JSWindowConfig(BaseModel):
    """Pop-up window options for image links."""

    new_window: bool = Field(False, alias="newWindow", description="Open every image in its own window")
    expand: str = Field("", description="'x,y' pixels added to the window size")
    params: str = Field("", description="Window features overriding the defaults, e.g. 'status=1,foo=bar'")
    alt_url: str = Field("", alias="altUrl", description="Alternative pop-up url")
    alt_url_no_default_params: bool = Field(False, alias="altUrl_noDefaultParams")

    model_config = {"extra": "forbid", "populate_by_name": True, "coerce_numbers_to_str": True}

    @property
    def expand_offsets(self) -> tuple[int, int]:
        parts = [p.strip() for p in self.expand.split(",")] + ["", ""]
        return _to_int(parts[0]), _to_int(parts[1])


def _to_int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


class ImageLinkConfig(BaseModel):
    """Configuration of an image wrapped in a link to its enlarged version."""

    enable: bool = Field(False, description="Wrap the image at all")
    enable_wrap: Optional[StdWrapConfig] = Field(None, alias="enable.")
    width: str = Field("", description="Pop-up image width, e.g. '800' or '800m'")
    width_wrap: Optional[StdWrapConfig] = Field(None, alias="width.")
    height: str = Field("", description="Pop-up image height, e.g. '600' or '600m'")
    height_wrap: Optional[StdWrapConfig] = Field(None, alias="height.")
    effects: str = ""
    effects_wrap: Optional[StdWrapConfig] = Field(None, alias="effects.")
    body_tag: str = Field("", alias="bodyTag")
    body_tag_wrap: Optional[StdWrapConfig] = Field(None, alias="bodyTag.")
    title: str = ""
    title_wrap: Optional[StdWrapConfig] = Field(None, alias="title.")
    wrap: str = ""
    wrap_wrap: Optional[StdWrapConfig] = Field(None, alias="wrap.")
    crop: str = ""
    crop_wrap: Optional[StdWrapConfig] = Field(None, alias="crop.")
    sample: bool = False
    target: str = ""
    direct_image_link: bool = Field(False, alias="directImageLink")
    jswindow: bool = Field(False, alias="JSwindow")
    jswindow_config: JSWindowConfig = Field(default_factory=JSWindowConfig, alias="JSwindow.")
    link_params: dict[str, Any] = Field(default_factory=dict, alias="linkParams.")
    std_wrap: Optional[StdWrapConfig] = Field(None, alias="stdWrap.")

    model_config = {"extra": "forbid", "populate_by_name": True, "coerce_numbers_to_str": True}


def _expand_env_var(value: Optional[str]) -> Optional[str]:
    """Expand environment variable references in a string.

    Supports $VAR and ${VAR} syntax. Returns original value if
    the env var is not set.
    """
    import os
    import re

    if value is None:
        return None

    pattern = r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)"

    def replace(match: re.Match) -> str:
        var_name = match.group(1) or match.group(2)
        return os.environ.get(var_name, match.group(0))

    return re.sub(pattern, replace, value)


class RenderConfig(BaseModel):
    """
    Site-wide rendering settings.

    Example:
        config = RenderConfig(
            spamProtectEmailAddresses=2,
            spamProtectEmailAddresses_atSubst="(at)",
            absRefPrefix="/",
        )

    YAML format:
        spamProtectEmailAddresses: 2
        spamProtectEmailAddresses_atSubst: (at)
        absRefPrefix: /
        site_domains:
          - www.example.org
    """

    spam_protect_email_addresses: int = Field(
        0,
        alias="spamProtectEmailAddresses",
        description="Character shift for email obfuscation (0 = disabled)",
    )
    spam_protect_at_subst: str = Field(
        "",
        alias="spamProtectEmailAddresses_atSubst",
        description="Visible replacement for '@' (default '(at)')",
    )
    spam_protect_last_dot_subst: str = Field(
        "",
        alias="spamProtectEmailAddresses_lastDotSubst",
        description="Visible replacement for the last '.' of an address",
    )
    abs_ref_prefix: str = Field("", alias="absRefPrefix", description="Prefix for relative file links")
    ext_target: str = Field("", alias="extTarget", description="Default target for external urls")
    file_target: str = Field("", alias="fileTarget", description="Default target for file links")
    atag_params: str = Field("", alias="ATagParams", description="Attributes added to image pop-up anchors")
    site_domains: list[str] = Field(default_factory=list, description="Hosts treated as internal")
    encryption_key: str = Field("", description="HMAC key for image pop-up urls ($VAR expansion supported)")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field("WARNING", description="Logging level")
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid", "populate_by_name": True}

    def model_post_init(self, __context: object) -> None:
        if self.encryption_key:
            object.__setattr__(self, "encryption_key", _expand_env_var(self.encryption_key))

    @property
    def obfuscation_vector(self) -> ObfuscationVector:
        return ObfuscationVector(
            offset=self.spam_protect_email_addresses,
            at_substitute=self.spam_protect_at_subst,
            last_dot_substitute=self.spam_protect_last_dot_subst,
        )

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(
            self.model_dump(mode="json", by_alias=True, exclude_none=True),
            default_flow_style=False,
        )

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "RenderConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "RenderConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())
