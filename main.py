import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from tubescan.errors import DataSourceError, InvalidReference
from web.services.analysis_runner import DEFAULT_MAX_VIDEOS, run_analysis

load_dotenv()


def build_parser():
    parser = argparse.ArgumentParser(description="Analyze a YouTube channel, Shorts tab or video URL.")
    parser.add_argument("url", help="e.g. https://youtube.com/@mkbhd or https://youtube.com/shorts/VIDEO_ID")
    parser.add_argument("--max-videos", type=int, default=int(os.getenv("MAX_VIDEOS", DEFAULT_MAX_VIDEOS)),
                        help="recent videos to sample for channel analyses")
    parser.add_argument("--output", help="write the JSON result to this file instead of stdout")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    api_key = os.getenv('YOUTUBE_API_KEY')
    if not api_key:
        print("❌ Error: YOUTUBE_API_KEY not found in .env file", file=sys.stderr)
        return 1

    def progress(message):
        print(message, file=sys.stderr)

    try:
        result = run_analysis(
            args.url,
            api_key,
            max_videos=args.max_videos,
            top_n=int(os.getenv("TOP_VIDEOS", 10)),
            logger=progress,
        )
    except InvalidReference as e:
        print(f"❌ Validation Error: {e}", file=sys.stderr)
        return 1
    except DataSourceError as e:
        print(f"❌ YouTube Error: {e}", file=sys.stderr)
        return 1

    payload = json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(payload, encoding="utf-8")
        print(f"✅ Analysis saved to: {output_path}", file=sys.stderr)
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
