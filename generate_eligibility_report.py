#!/usr/bin/env python3
"""
Generate the cohort graduation eligibility report from CSV exports
Usage: python3 generate_eligibility_report.py <data_dir> <output_csv>
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from servants_prep.config import get_settings, setup_logging
from servants_prep.processing import ProgressDataProcessor, build_eligibility_report
from servants_prep.services import ProgressService


def main() -> int:
    logger = setup_logging()
    settings = get_settings()

    data_dir = Path(sys.argv[1]).expanduser() if len(sys.argv) > 1 else settings.data_dir
    output_path = Path(sys.argv[2]).expanduser() if len(sys.argv) > 2 else Path("eligibility_report.csv")

    logger.info(f"Data Dir: {data_dir}")
    logger.info(f"Output:   {output_path}")

    processor = ProgressDataProcessor(data_dir)
    loaded = processor.load_all_data()
    print(processor.generate_validation_report())
    if not loaded:
        print("ERROR: Could not load required data sources")
        print("Usage: python3 generate_eligibility_report.py <data_dir> <output_csv>")
        return 1

    service = ProgressService(processor.build_repository(), settings=settings)
    report = build_eligibility_report(service, processor.get_all_student_ids(), progress=True)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    report.to_csv(output_path, index=False)

    eligible = int(report["Eligible"].sum()) if not report.empty else 0
    print(f"\n✅ Report written to {output_path}")
    print(f"   {eligible} of {len(report)} students currently eligible")
    return 0


if __name__ == "__main__":
    sys.exit(main())
