#!/usr/bin/env python3
"""
Generate a small encrypted RPG Maker game tree for manual testing.
Requires FFmpeg for the OGG and M4A samples.
"""
import json
import os
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from rpgmcrypt.main import rpgmcrypt

DEFAULT_KEY = "d41d8cd98f00b204e9800998ecf8427e"


def run_cmd(cmd):
    result = subprocess.run(cmd, capture_output=True, text=True)
    if result.returncode != 0:
        print(f"Command failed: {' '.join(cmd)}", file=sys.stderr)
        print(f"stderr: {result.stderr}", file=sys.stderr)
        sys.exit(1)
    return result


def check_ffmpeg():
    """Check if ffmpeg is available."""
    try:
        result = subprocess.run(["ffmpeg", "-version"], capture_output=True)
    except FileNotFoundError:
        result = None
    if result is None or result.returncode != 0:
        print("ERROR: ffmpeg not found. Install it with: apt-get install ffmpeg", file=sys.stderr)
        return False
    return True


def generate_png(output_path, width=96, height=96):
    """Noisy RGBA sprite sheet, written with Pillow."""
    print(f"Generating PNG: {output_path}")
    if rpgmcrypt.Image is None:
        print("ERROR: Pillow is required (pip install Pillow)", file=sys.stderr)
        sys.exit(1)
    image = rpgmcrypt.Image.frombytes("RGBA", (width, height), os.urandom(width * height * 4))
    image.save(output_path, format="PNG")
    print(f"  ✓ {output_path}")


def generate_ogg(output_path, duration_sec=2):
    print(f"Generating OGG: {output_path} ({duration_sec}s)")
    run_cmd([
        "ffmpeg", "-y", "-f", "lavfi", "-i", f"sine=frequency=440:duration={duration_sec}",
        "-c:a", "libvorbis", str(output_path),
    ])
    print(f"  ✓ {output_path}")


def generate_m4a(output_path, duration_sec=2):
    print(f"Generating M4A: {output_path} ({duration_sec}s)")
    run_cmd([
        "ffmpeg", "-y", "-f", "lavfi", "-i", f"anoisesrc=d={duration_sec}:a=0.1",
        "-c:a", "aac", "-b:a", "96k", "-brand", "M4A ", str(output_path),
    ])
    print(f"  ✓ {output_path}")


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    game_dir = Path(argv[0]) if argv else REPO_ROOT / "sample_game"
    engine = argv[1] if len(argv) > 1 else "mv"
    if not check_ffmpeg():
        return 1

    plain_dir = game_dir / "plain"
    media_files = [
        (plain_dir / "img" / "pictures" / "Actor1.png", generate_png),
        (plain_dir / "audio" / "bgm" / "Theme1.ogg", generate_ogg),
        (plain_dir / "audio" / "se" / "Cursor1.m4a", generate_m4a),
    ]
    print("Generating sample game assets...")
    for output_path, gen_func in media_files:
        if output_path.exists():
            print(f"Skipping {output_path.name} (already exists)")
            continue
        output_path.parent.mkdir(parents=True, exist_ok=True)
        gen_func(output_path)

    data_dir = game_dir / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    (data_dir / rpgmcrypt.SYSTEM_JSON).write_text(
        json.dumps({
            "gameTitle": "Sample",
            "hasEncryptedImages": True,
            "hasEncryptedAudio": True,
            rpgmcrypt.KEY_FIELD: DEFAULT_KEY,
        }, indent=2),
        encoding="utf-8",
    )

    results = rpgmcrypt.process(
        "encrypt", plain_dir, DEFAULT_KEY, engine, game_dir, recursive=True
    )
    print("\nEncrypted assets:")
    failed = False
    for path, status in results.items():
        if status == rpgmcrypt.SUCCESS:
            print(f"  ✓ {Path(path).relative_to(plain_dir)}")
        else:
            failed = True
            print(f"  ✗ {Path(path).relative_to(plain_dir)}: {status}", file=sys.stderr)
    print(f"\nKey: {DEFAULT_KEY} (stored in {data_dir / rpgmcrypt.SYSTEM_JSON})")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
