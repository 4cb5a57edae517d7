"""setup-react -- bootstrap a Vite + React + TypeScript frontend."""

__version__ = "0.1.0"
