"""
Basic vttstream usage example.

Parses a local WebVTT file and writes its samples to samples.json.
"""

import logging

from vttstream import SampleExtractor

def main():
    logging.basicConfig(level=logging.INFO)

    extractor = SampleExtractor()

    print("Parsing WebVTT file...")
    result = extractor.extract_to_json(
        vtt_file="subtitles.vtt",
        output_file="samples.json"
    )

    print(f"Extracted {result['samples_count']} samples")
    print(f"Output saved to: {result['samples_path']}")

if __name__ == "__main__":
    main()
