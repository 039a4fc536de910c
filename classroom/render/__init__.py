from .csv_out import csv_table, write_csv

__all__ = ["csv_table", "write_csv"]
