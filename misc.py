from os import path


# manage root directories
def _project_root() -> str:
    _root = path.join(__file__, path.pardir)
    return path.abspath(_root)


ROOT = _project_root()

CONFIG_FN = 'oanda_api.yml'
CONFIG_F = path.join(ROOT, CONFIG_FN)
