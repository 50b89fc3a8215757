from statistics import mean, median
from .models import ResultCollection

def compute_statistics(collection: ResultCollection) -> dict:
    files = collection.scanned()
    if not files:
        return {}

    totals = [f.total_lines for f in files]
    codes = [f.code for f in files]
    comments = [f.comment for f in files]

    total_lines = sum(totals)
    return {
        "mean_total_lines": mean(totals),
        "median_total_lines": median(totals),
        "mean_code_lines": mean(codes),
        "median_code_lines": median(codes),
        "comment_ratio": round(sum(comments) / total_lines, 4) if total_lines else 0.0,
    }
