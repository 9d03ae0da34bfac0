"""Simple demo: load a workbook/CSV or pasted-text file and print trades and balances.

Usage:
  python scripts/run_demo.py trades.xlsx [positional|header]
  python scripts/run_demo.py pasted.txt header
"""
import sys
from pathlib import Path
from shifttrades.pipeline import load_workbook, load_pasted_text
from shifttrades.summary import summarize, sort_summary
from shifttrades.output import write_json, write_excel, combined_to_csv
from shifttrades.loader import ALLOWED_SUFFIXES
from shifttrades.settings import setup_logging


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    setup_logging()
    src = Path(sys.argv[1])
    mode = sys.argv[2] if len(sys.argv) > 2 else None
    if not src.exists():
        print(f'{src} not found')
        sys.exit(1)

    if src.suffix.lower() in ALLOWED_SUFFIXES:
        result = load_workbook(src.read_bytes(), src.name, mode)
    else:
        result = load_pasted_text(src.read_text(encoding='utf-8'), mode)

    print(result.to_json())
    if not result.success:
        sys.exit(2)

    summaries = sort_summary(summarize(result.trades))
    print(combined_to_csv(result.trades, summaries))

    # Save outputs for audit
    out_dir = Path('output')
    out_dir.mkdir(exist_ok=True)
    out_json_path = out_dir / f"{src.stem}-trades.json"
    write_json({'trades': [t.to_dict() for t in result.trades], 'summary': [s.to_dict() for s in summaries]}, str(out_json_path))
    print(f"Wrote JSON to {out_json_path}")

    excel_path = out_dir / f"{src.stem}-summary.xlsx"
    write_excel(result.trades, summaries, excel_path)
    print(f"Wrote Excel to {excel_path}")


if __name__ == '__main__':
    main()
