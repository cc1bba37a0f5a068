"""CLI: build an MFCC calibration profile from WAV files or the microphone."""

import argparse
import logging
import sys
from pathlib import Path

from mfcc_profile.audio import AudioCollector
from mfcc_profile.config import CompareMethod, ProfileConfig
from mfcc_profile.errors import InvalidArgument, SerializationFailure
from mfcc_profile.store import ProfileGenerator

COMPARE_METHODS = {
    "l1": CompareMethod.L1_NORM,
    "l2": CompareMethod.L2_NORM,
    "cosine": CompareMethod.COSINE_SIMILARITY,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mfcc-profile",
        description="Extract MFCCs per label and export a calibration profile (JSON)",
    )
    parser.add_argument("--target-rate", type=int, default=16_000, help="Target sample rate in Hz (default: 16000)")
    parser.add_argument("--mel-channels", type=int, default=24, help="Mel filter bank channels (default: 24)")
    parser.add_argument("--frame-size", type=int, default=1024, help="Samples per frame (default: 1024)")
    parser.add_argument("--capacity", type=int, default=16, help="Max vectors kept per label (default: 16)")
    parser.add_argument(
        "--compare-method",
        choices=sorted(COMPARE_METHODS),
        default="l2",
        help="Comparison method recorded in the profile (default: l2)",
    )
    parser.add_argument("--standardize", action="store_true", help="Mark the profile as using standardization")
    parser.add_argument(
        "--sample",
        nargs=2,
        action="append",
        default=[],
        metavar=("LABEL", "WAV"),
        help="Add a WAV file under LABEL (repeatable)",
    )
    parser.add_argument("--record", metavar="LABEL", help="Record from the microphone under LABEL")
    parser.add_argument(
        "--duration",
        type=float,
        default=3.0,
        help="Recording duration in seconds (default: 3)",
    )
    parser.add_argument(
        "--device",
        type=int,
        default=None,
        help="Input device index (list with --list-devices)",
    )
    parser.add_argument(
        "--list-devices",
        action="store_true",
        help="List available audio input devices and exit",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output JSON path (default: stdout)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list_devices:
        try:
            import sounddevice as sd
            print(sd.query_devices())
        except ImportError:
            print("sounddevice not installed: pip install sounddevice", file=sys.stderr)
            return 1
        return 0

    try:
        config = ProfileConfig(
            target_sample_rate=args.target_rate,
            mel_filter_bank_channels=args.mel_channels,
            sample_count=args.frame_size,
            mfcc_data_count=args.capacity,
            compare_method=COMPARE_METHODS[args.compare_method],
            use_standardization=args.standardize,
        )
        generator = ProfileGenerator(config)
        collector = AudioCollector(sample_rate=args.target_rate)

        for label, path in args.sample:
            audio, sr = collector.load_wav(path)
            n = generator.add_sample(audio, label, sr)
            print(f"{label}: {n} vector(s) from {path}", file=sys.stderr)

        if args.record:
            print(f"Recording {args.duration}s for '{args.record}' (mono {args.target_rate} Hz)...", file=sys.stderr)
            audio = collector.record_chunk(args.duration, device=args.device)
            n = generator.add_sample(audio, args.record, args.target_rate)
            print(f"{args.record}: {n} vector(s) recorded", file=sys.stderr)
    except InvalidArgument as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        text = generator.finish()
    except SerializationFailure as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.output is None:
        print(text)
    else:
        args.output.write_text(text + "\n", encoding="utf-8")
        print(f"Saved: {args.output}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
