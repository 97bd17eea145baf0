import os

HERE = os.path.dirname(os.path.abspath(__file__))


def example_filename(fn):
    """
    Return the full path of a data file that ships with bedutils.
    """
    return os.path.join(HERE, "test", "data", fn)
