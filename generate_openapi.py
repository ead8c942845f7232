#!/usr/bin/env python3
"""
Generate OpenAPI schema from FastAPI application.

This script exports the OpenAPI schema from the FastAPI app to openapi.json
so the function handler contracts can be reviewed or used for client
generation.

Usage:
    python generate_openapi.py [output-path]
"""

import json
import sys
from pathlib import Path

# Add src directory to path to import the app
sys.path.insert(0, str(Path(__file__).parent / "src"))

try:
    from voiceclone.api.main import app
except ImportError as e:
    print(f"Error importing FastAPI app: {e}")
    print("Make sure you have installed the dependencies:")
    print("  pip install -e .")
    sys.exit(1)


def generate_openapi_schema(output_path: Path) -> None:
    """Generate and save OpenAPI schema."""
    openapi_schema = app.openapi()

    with open(output_path, "w") as f:
        json.dump(openapi_schema, f, indent=2)

    print(f"✅ OpenAPI schema exported to {output_path}")
    print(f"   Total endpoints: {len(openapi_schema.get('paths', {}))}")
    print(f"   API version: {openapi_schema.get('info', {}).get('version', 'unknown')}")


if __name__ == "__main__":
    target = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(__file__).parent / "openapi.json"
    generate_openapi_schema(target)
