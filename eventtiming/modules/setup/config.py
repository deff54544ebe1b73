from typing import Any

import yaml


class Config(dict):
    """
    Config class that allows for dot notation.
    Nested dicts are converted to Config on assignment.
    """

    def __init__(self, dictionary: dict = None):
        super().__init__()
        for key, value in (dictionary or {}).items():
            self[key] = value

    def __setitem__(self, key: str, value: Any) -> None:
        super().__setitem__(key, self._convert(value))

    def __getattr__(self, name: str) -> Any:
        try:
            return self[name]
        except KeyError as e:
            raise AttributeError(f"Config has no attribute '{name}'") from e

    def __setattr__(self, name: str, value: Any) -> None:
        self[name] = value

    def __delattr__(self, name: str) -> None:
        del self[name]

    @classmethod
    def _convert(cls, value: Any) -> Any:
        if isinstance(value, dict) and not isinstance(value, Config):
            return cls(value)
        if isinstance(value, list):
            return [cls._convert(v) for v in value]
        return value

    def to_dict(self) -> dict:
        """Converts the Config (and nested Configs) back to plain dicts."""
        return {
            key: value.to_dict()
            if isinstance(value, Config)
            else [v.to_dict() if isinstance(v, Config) else v for v in value]
            if isinstance(value, list)
            else value
            for key, value in self.items()
        }

    def yaml_repr(self, dumper: yaml.Dumper):
        return dumper.represent_dict(self.to_dict())


yaml.add_representer(Config, lambda dumper, data: data.yaml_repr(dumper))


def load_config(config_path: str) -> Config:
    """Loads a yaml config file into a Config."""
    with open(config_path, "r") as f:
        cfg = yaml.safe_load(f)
    return Config(cfg)
