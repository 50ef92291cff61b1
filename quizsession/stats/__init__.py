from .stats import category_summary, export_ndjson, export_parquet, format_summary, results_frame

__all__ = ["category_summary", "export_ndjson", "export_parquet", "format_summary", "results_frame"]
