import json
import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


class PayloadParser:
    def __init__(self, payload_path: str):
        self.payload_path = payload_path

    def parse(self) -> Any:
        """Load a request payload from a JSON or YAML file."""
        path = Path(self.payload_path)

        try:
            with open(path, "r") as f:
                if path.suffix.lower() in YAML_SUFFIXES:
                    payload = yaml.safe_load(f)
                else:
                    payload = json.load(f)

        except FileNotFoundError:
            raise FileNotFoundError(f"Payload file not found: {self.payload_path}")
        except (ValueError, yaml.YAMLError) as e:
            raise ValueError(f"Error parsing payload file {self.payload_path}: {e}") from e

        if payload is None:
            raise ValueError(f"Payload file {self.payload_path} is empty")

        logger.info(f"Loaded payload from {self.payload_path}")
        return payload
