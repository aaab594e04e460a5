# utils/mongo_df.py
from bson import ObjectId
import pandas as pd

def docs_to_df(docs, drop_fields=None):
    drop_fields = set(drop_fields or [])
    rows = []
    for d in docs:
        row = {}
        for k, v in d.items():
            if k in drop_fields:
                continue
            if isinstance(v, ObjectId):
                v = str(v)
            elif isinstance(v, list):
                v = ", ".join(str(x) for x in v)
            row[k] = v
        rows.append(row)
    return pd.DataFrame(rows)
