# drivers/discovery.py
try:
    import pyvisa
    HAS_VISA = True
except Exception:
    pyvisa = None
    HAS_VISA = False

from core.logging import get_logger

log = get_logger(__name__)


def scan_resources(backends, query: str = "?*", include_fake: bool = True):
    """[(ресурс, backend), ...]: каждый ресурс один раз, с первым backend'ом,
    который его увидел. Симулятор 'FAKE' добавляется в конец."""
    found = {}
    for be in (backends if HAS_VISA else ()):
        name = be or "default"
        try:
            rm = pyvisa.ResourceManager(be) if be else pyvisa.ResourceManager()
            resources = rm.list_resources(query)
        except Exception as e:
            # нет backend'а (pyvisa-py / системная VISA): просто пропускаем
            log.debug("scan %s: %s", name, e)
            continue
        for r in resources:
            found.setdefault(r, name)
    pairs = list(found.items())
    if include_fake:
        pairs.append(("FAKE", "FAKE"))
    return pairs
