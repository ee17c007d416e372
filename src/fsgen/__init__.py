"""fsgen: derive fstab, systemd mount/format units and boot filesystem lists from a declarative config."""

__version__ = "0.1.0"
