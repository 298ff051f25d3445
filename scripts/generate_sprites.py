#!/usr/bin/env python3
"""Generate placeholder sprite sheets for the sprite animator."""

from pathlib import Path
import sys

# Add src to path for running directly
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sprite_animator.assets.placeholder_generator import generate_placeholders


def main():
    """Generate all placeholder sheets."""
    output_dir = Path(__file__).parent.parent / "assets"
    print(f"Generating placeholder sheets in {output_dir}")

    generated = generate_placeholders(output_dir)

    print(f"Generated {len(generated)} sheets:")
    for name, path in generated.items():
        print(f"  - {name}: {path}")


if __name__ == "__main__":
    main()
