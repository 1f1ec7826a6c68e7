import random, numpy as np

def pytest_configure():
    # Fresh random parameters every run; properties must hold for all of them
    random.seed()                # system time
    np.random.seed()
