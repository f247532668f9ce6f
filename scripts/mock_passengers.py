import numpy as np
import pandas as pd
from pathlib import Path

n_passengers = 1300
rng = np.random.default_rng(1912)

pclass = rng.choice([1, 2, 3], size=n_passengers, p=[0.25, 0.21, 0.54])
sex = rng.choice(["female", "male"], size=n_passengers, p=[0.36, 0.64])

# Survival odds by class and sex, roughly like the historical record
base = np.where(sex == "female", 0.73, 0.19)
class_shift = np.select([pclass == 1, pclass == 2], [0.15, 0.0], default=-0.12)
survived = (rng.random(n_passengers) < np.clip(base + class_shift, 0.02, 0.98)).astype(int)

age = np.clip(rng.normal(loc=30, scale=14, size=n_passengers), 0.2, 80).round(1)
age[rng.random(n_passengers) < 0.2] = np.nan

# About one in ten of the dead were recovered and numbered
body = np.where(
    (survived == 0) & (rng.random(n_passengers) < 0.1),
    rng.integers(1, 330, size=n_passengers),
    -1,
)

df = pd.DataFrame(
    {
        "pclass": pclass,
        "survived": survived,
        "sex": sex,
        "age": age,
        "body": pd.Series(body).where(body > 0).astype("Int64"),
    }
)

Path("data").mkdir(exist_ok=True)
df.to_csv("data/titanic_mock.csv", index=False)
print("wrote data/titanic_mock.csv", df.shape)
