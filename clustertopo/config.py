"""Configuration management for the clustertopo application."""
import os
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

class Config:
    """Application configuration with sensible defaults."""

    # Kubeconfig used when neither the flag nor KUBECONFIG name one
    DEFAULT_KUBECONFIG: str = os.getenv("CLUSTERTOPO_DEFAULT_KUBECONFIG", "~/.kube/config")
    KUBECONFIG_ENV: str = "KUBECONFIG"

    # Network assigned to every cluster when no control plane topology is given, not overridable
    DEFAULT_NETWORK: str = "network-0"

    # YAML file holding topology flags
    CONFIG_FILE: str = os.getenv("CLUSTERTOPO_CONFIG", "clustertopo.yaml")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration."""
        required = {
            "DEFAULT_KUBECONFIG": cls.DEFAULT_KUBECONFIG,
        }
        missing = [k for k, v in required.items() if not v]
        if missing:
            raise ValueError(f"Missing required configuration: {', '.join(missing)}")
