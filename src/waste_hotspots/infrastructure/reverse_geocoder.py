# ============================================================
# 📦 src/waste_hotspots/infrastructure/reverse_geocoder.py
# ============================================================

import math
import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import List, Optional, Sequence, Tuple

import requests
from loguru import logger

from waste_hotspots.config import settings
from waste_hotspots.domain.hotspot_clusterer import coordinate_label


# ============================================================
# 🗺️ GOOGLE
# ============================================================
class GoogleReverseGeocoder:

    URL = "https://maps.googleapis.com/maps/api/geocode/json"

    def __init__(self, api_key: str, timeout: float = settings.GEOCODE_TIMEOUT_SEC):
        self.api_key = api_key
        self.timeout = timeout

    def reverse(self, lat: float, lon: float) -> Optional[str]:
        params = {"latlng": f"{lat},{lon}", "key": self.api_key}
        r = requests.get(self.URL, params=params, timeout=self.timeout)

        if r.status_code != 200:
            logger.warning(f"[GEOCODE][GOOGLE][HTTP {r.status_code}] lat={lat:.5f} lon={lon:.5f}")
            return None

        dados = r.json()
        if dados.get("status") != "OK" or not dados.get("results"):
            logger.warning(
                f"[GEOCODE][GOOGLE][MISS] status={dados.get('status')} "
                f"erro={dados.get('error_message', '-')}"
            )
            return None

        endereco = dados["results"][0].get("formatted_address")
        logger.debug(f"[GEOCODE][GOOGLE][OK] {endereco}")
        return endereco


# ============================================================
# 🌍 NOMINATIM
# ============================================================
class NominatimReverseGeocoder:

    def __init__(
        self,
        base_url: str = settings.NOMINATIM_URL,
        timeout: float = settings.GEOCODE_TIMEOUT_SEC,
        user_agent: str = settings.GEOCODER_USER_AGENT,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {"User-Agent": user_agent}

    def reverse(self, lat: float, lon: float) -> Optional[str]:
        params = {
            "lat": lat,
            "lon": lon,
            "format": "json",
            "zoom": 17,
            "addressdetails": 0,
        }
        r = requests.get(
            f"{self.base_url}/reverse",
            params=params,
            headers=self.headers,
            timeout=self.timeout,
        )

        if r.status_code != 200:
            logger.warning(f"[GEOCODE][NOMINATIM][HTTP {r.status_code}] lat={lat:.5f} lon={lon:.5f}")
            return None

        dados = r.json()
        endereco = dados.get("display_name") if isinstance(dados, dict) else None
        if not endereco:
            logger.warning(f"[GEOCODE][NOMINATIM][MISS] {dados.get('error') if isinstance(dados, dict) else dados}")
            return None

        logger.debug(f"[GEOCODE][NOMINATIM][OK] {endereco}")
        return endereco


# ============================================================
# 🔗 Cascata (primeiro acerto vence)
# ============================================================
class ChainedReverseGeocoder:

    def __init__(self, geocoders):
        self.geocoders = list(geocoders)

    def reverse(self, lat: float, lon: float) -> Optional[str]:
        for geocoder in self.geocoders:
            nome = type(geocoder).__name__
            try:
                endereco = geocoder.reverse(lat, lon)
            except Exception as e:
                logger.warning(f"[GEOCODE][{nome}][ERRO] {e}")
                continue
            if endereco:
                return endereco
        return None


def build_reverse_geocoder(
    provider: str = settings.GEOCODER_PROVIDER,
    google_key: Optional[str] = settings.GMAPS_API_KEY,
    timeout: float = settings.GEOCODE_TIMEOUT_SEC,
):
    """
    auto      → Google (se houver chave) e depois Nominatim
    google    → apenas Google
    nominatim → apenas Nominatim
    none      → sem geocodificação (None)
    """
    provider = (provider or "auto").strip().lower()

    if provider == "none":
        return None

    if provider == "google":
        if not google_key:
            logger.warning("⚠️ GEOCODER_PROVIDER=google sem GMAPS_API_KEY — geocodificação desativada")
            return None
        return GoogleReverseGeocoder(google_key, timeout=timeout)

    if provider == "nominatim":
        return NominatimReverseGeocoder(timeout=timeout)

    if provider != "auto":
        raise ValueError(f"GEOCODER_PROVIDER inválido: '{provider}'")

    cadeia = []
    if google_key:
        cadeia.append(GoogleReverseGeocoder(google_key, timeout=timeout))
    cadeia.append(NominatimReverseGeocoder(timeout=timeout))
    return ChainedReverseGeocoder(cadeia)


# ============================================================
# ⚡ Resolução em lote com concorrência limitada
# ============================================================
class AddressResolutionService:
    """
    Resolve um endereço por centróide usando um pool limitado de threads.

    Qualquer falha (exceção, resposta vazia, chamada acima de `timeout`
    segundos) vira o rótulo de coordenadas "{lat:.4f}, {lon:.4f}".
    Nunca levanta exceção. `stats` reflete apenas o último lote.
    """

    def __init__(
        self,
        geocoder=None,
        max_workers: int = settings.GEOCODE_MAX_WORKERS,
        timeout: float = settings.GEOCODE_TIMEOUT_SEC,
    ):
        self.geocoder = geocoder
        self.max_workers = max(1, int(max_workers))
        self.timeout = timeout

        self.stats = {"geocoder": 0, "fallback": 0, "total": 0}

    def _resolver_um(self, lat: float, lon: float) -> Tuple[Optional[str], float]:
        """Devolve (endereço, duração em segundos da chamada)."""
        inicio = time.monotonic()
        try:
            endereco = self.geocoder.reverse(lat, lon)
        except Exception as e:
            logger.warning(f"[GEOCODE][ERRO] lat={lat:.5f} lon={lon:.5f} | {e}")
            endereco = None
        return endereco, time.monotonic() - inicio

    def resolve(self, centroids: Sequence[Tuple[float, float]]) -> List[str]:
        enderecos = [coordinate_label(lat, lon) for lat, lon in centroids]

        # contadores do lote; só a thread chamadora escreve aqui
        stats = {"geocoder": 0, "fallback": 0, "total": len(centroids)}
        self.stats = stats

        if not centroids:
            return enderecos

        if self.geocoder is None:
            stats["fallback"] = len(centroids)
            return enderecos

        logger.info(f"[GEOCODE][BATCH][INICIO] {len(centroids)} centróides | workers={self.max_workers}")

        # prazo total = prazo por chamada × número de "ondas" do pool
        ondas = math.ceil(len(centroids) / self.max_workers)
        prazo = self.timeout * ondas + 1.0

        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        try:
            futuros = {
                executor.submit(self._resolver_um, lat, lon): idx
                for idx, (lat, lon) in enumerate(centroids)
            }
            concluidos, pendentes = wait(futuros, timeout=prazo)

            for futuro in concluidos:
                idx = futuros[futuro]
                endereco, duracao = futuro.result()
                if duracao > self.timeout:
                    logger.warning(
                        f"[GEOCODE][TIMEOUT] idx={idx} levou {duracao:.2f}s "
                        f"(limite {self.timeout}s) — usando coordenadas"
                    )
                    stats["fallback"] += 1
                elif endereco:
                    enderecos[idx] = endereco
                    stats["geocoder"] += 1
                else:
                    stats["fallback"] += 1

            for futuro in pendentes:
                futuro.cancel()
                logger.warning(f"[GEOCODE][TIMEOUT] idx={futuros[futuro]} após {prazo:.1f}s — usando coordenadas")
                stats["fallback"] += 1
        finally:
            # não espera chamadas presas; o requests timeout encerra as threads
            executor.shutdown(wait=False)

        logger.info(
            f"[GEOCODE][BATCH][FIM] geocoder={stats['geocoder']} "
            f"fallback={stats['fallback']} total={stats['total']}"
        )
        return enderecos
