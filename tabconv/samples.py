"""Example documents for each input format."""
from __future__ import annotations
import json

from .errors import ConversionError

CSV = """name,age,city
Alice,30,Beijing
Bob,25,Shanghai
Carol,28,Guangzhou"""

TSV = CSV.replace(",", "\t")

JSON = json.dumps(
    [
        {"Name": "Alice", "Age": 30, "City": "Beijing"},
        {"Name": "Bob", "Age": 25, "City": "Shanghai"},
    ],
    indent=2,
)

HTML = """<table>
  <thead>
    <tr>
      <th>Name</th>
      <th>Age</th>
      <th>City</th>
    </tr>
  </thead>
  <tbody>
    <tr>
      <td>Alice</td>
      <td>30</td>
      <td>Beijing</td>
    </tr>
    <tr>
      <td>Bob</td>
      <td>25</td>
      <td>Shanghai</td>
    </tr>
  </tbody>
</table>"""

SAMPLES = {"csv": CSV, "tsv": TSV, "json": JSON, "html": HTML}


def get_sample(fmt) -> str:
    key = str(fmt).strip().lower()
    if key not in SAMPLES:
        raise ConversionError(f"No sample input for format '{key}'.")
    return SAMPLES[key]
