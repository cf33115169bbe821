#!/usr/bin/env python3
"""
Round-trip evaluation for the Huffman text codec.

This evaluation script:
- Compresses and decompresses every given text file in memory
- Records sizes, compression ratio and whether the round trip was lossless
- Generates a structured JSON report with environment metadata

Run with:
    python evaluation/evaluation.py docs/*.txt [--group-size 7] [--output report.json]
"""
import os
import sys
import json
import uuid
import platform
from datetime import datetime
from pathlib import Path

CODEC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'codec'))
if CODEC_DIR not in sys.path:
    sys.path.insert(0, CODEC_DIR)

from huffman_config import CodecConfig, DEFAULT_GROUP_SIZE  # noqa: E402
from huffman_errors import HuffmanError  # noqa: E402
from huffman_service import HuffmanService  # noqa: E402


def generate_run_id():
    """Generate a short unique run ID."""
    return uuid.uuid4().hex[:8]


def get_environment_info():
    """Collect environment information for the report."""
    return {
        "python_version": platform.python_version(),
        "platform": platform.platform(),
        "os": platform.system(),
        "architecture": platform.machine(),
    }


def evaluate_file(path, service, encoding="utf-8"):
    """
    Run one file through compress and decompress.

    Args:
        path: Text file to evaluate
        service: HuffmanService used for both directions
        encoding: Text encoding of the file

    Returns:
        dict with sizes, ratio, padding and the lossless flag, or the error
    """
    path = Path(path)
    result = {"file": str(path), "lossless": False}
    try:
        with open(path, "r", encoding=encoding, newline="") as f:
            text = f.read()
        compressed, stats = service.compress_with_stats(text)
        restored = service.decompress(compressed)
    except (HuffmanError, OSError, UnicodeError) as e:
        result["error"] = str(e)
        return result

    original_bytes = len(text.encode(encoding))
    result.update({
        "symbols": stats.input_symbols,
        "distinct_symbols": stats.distinct_symbols,
        "original_bytes": original_bytes,
        "compressed_bytes": stats.artifact_bytes,
        "encoded_bits": stats.encoded_bits,
        "padding": stats.padding,
        "ratio": round(stats.artifact_bytes / original_bytes, 6) if original_bytes else 0.0,
        "lossless": restored == text,
    })
    return result


def run_evaluation(paths, service):
    """
    Evaluate every path and summarise the outcome.

    Returns dict with per-file results and the summary counts.
    """
    print(f"\n{'=' * 60}")
    print("HUFFMAN ROUND-TRIP EVALUATION")
    print(f"{'=' * 60}")

    files = []
    for path in paths:
        result = evaluate_file(path, service)
        status_icon = "✅" if result["lossless"] else "❌"
        detail = result.get("error") or f"{result['original_bytes']}B -> {result['compressed_bytes']}B"
        print(f"  {status_icon} {result['file']}: {detail}")
        files.append(result)

    lossless = sum(1 for r in files if r["lossless"])
    return {
        "files": files,
        "summary": {
            "total": len(files),
            "lossless": lossless,
            "failed": len(files) - lossless,
        },
    }


def generate_output_path():
    """Generate output path in format: evaluation/YYYY-MM-DD/HH-MM-SS/report.json"""
    now = datetime.now()
    date_str = now.strftime("%Y-%m-%d")
    time_str = now.strftime("%H-%M-%S")

    project_root = Path(__file__).parent.parent
    output_dir = project_root / "evaluation" / date_str / time_str
    output_dir.mkdir(parents=True, exist_ok=True)

    return output_dir / "report.json"


def main(argv=None):
    """Main entry point for evaluation."""
    import argparse

    parser = argparse.ArgumentParser(description="Run the Huffman round-trip evaluation")
    parser.add_argument("paths", nargs="+", help="Text files to evaluate")
    parser.add_argument(
        "--group-size",
        type=int,
        default=DEFAULT_GROUP_SIZE,
        help=f"Bits stored per byte (default: {DEFAULT_GROUP_SIZE})"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output JSON file path (default: evaluation/YYYY-MM-DD/HH-MM-SS/report.json)"
    )

    args = parser.parse_args(argv)
    try:
        service = HuffmanService(CodecConfig(group_size=args.group_size))
    except ValueError as e:
        parser.error(str(e))

    run_id = generate_run_id()
    started_at = datetime.now()

    print(f"Run ID: {run_id}")
    print(f"Started at: {started_at.isoformat()}")

    results = run_evaluation(args.paths, service)
    success = results["summary"]["failed"] == 0

    finished_at = datetime.now()
    duration = (finished_at - started_at).total_seconds()

    report = {
        "run_id": run_id,
        "started_at": started_at.isoformat(),
        "finished_at": finished_at.isoformat(),
        "duration_seconds": round(duration, 6),
        "success": success,
        "group_size": args.group_size,
        "environment": get_environment_info(),
        "results": results,
    }

    if args.output:
        output_path = Path(args.output)
    else:
        output_path = generate_output_path()

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        json.dump(report, f, indent=2)
    print(f"\n✅ Report saved to: {output_path}")

    print(f"\n{'=' * 60}")
    print("EVALUATION COMPLETE")
    print(f"{'=' * 60}")
    print(f"Run ID: {run_id}")
    print(f"Duration: {duration:.2f}s")
    print(f"Success: {'✅ YES' if success else '❌ NO'}")

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
