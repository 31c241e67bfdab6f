#!/usr/bin/env python3
"""
Análise de Performance do Cache de Clima
Mede latência cold (miss) vs warm (hit) contra um servidor em execução

Como usar:
    cd lambda && python local_server.py          # outro terminal
    python scripts/analyze_cache_performance.py --base-url http://localhost:3000
"""
import argparse
import asyncio
import statistics
import time
from typing import List, Tuple

import aiohttp

DEFAULT_CITIES = ['London', 'Paris', 'Tokyo', 'New York', 'Sao Paulo', 'Sydney', 'Cairo', 'Toronto']


async def timed_get(session: aiohttp.ClientSession, url: str, query: str) -> Tuple[float, int, dict]:
    """GET /api/weather?q=... retornando (latência ms, status, corpo)"""
    start = time.perf_counter()
    async with session.get(url, params={'q': query}) as response:
        body = await response.json(content_type=None)
        elapsed = (time.perf_counter() - start) * 1000
        return elapsed, response.status, body or {}


def summarize(label: str, times: List[float]) -> None:
    if not times:
        print(f"  • {label}: sem amostras")
        return

    print(f"  • {label}:")
    print(f"      Média: {statistics.mean(times):.2f}ms | Mediana: {statistics.median(times):.2f}ms")
    print(f"      Min: {min(times):.2f}ms | Max: {max(times):.2f}ms")
    if len(times) >= 20:
        print(f"      P95: {statistics.quantiles(times, n=20)[18]:.2f}ms")


async def analyze(base_url: str, cities: List[str], warm_rounds: int) -> None:
    url = f"{base_url.rstrip('/')}/api/weather"

    print("=" * 70)
    print("🔍 ANÁLISE DE PERFORMANCE - CACHE DE CLIMA")
    print("=" * 70)
    print(f"Servidor: {base_url}")
    print(f"Cidades: {len(cities)} | Rodadas warm: {warm_rounds}")

    async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=30)) as session:
        async with session.get(f"{base_url.rstrip('/')}/health") as response:
            health = await response.json(content_type=None)
        cache_state = health.get('cache', {})
        print(f"Cache remoto: {cache_state.get('remoteState')} | Entradas locais: {cache_state.get('localEntries')}")

        # Teste 1: primeira requisição por cidade (miss esperado)
        print("\n❄️  Teste 1: requisições COLD")
        print("-" * 70)
        cold_times, unexpected_hits, errors = [], 0, 0
        for city in cities:
            elapsed, status, body = await timed_get(session, url, city)
            if status != 200:
                errors += 1
                print(f"  ⚠️  {city}: HTTP {status} - {body.get('message')}")
                continue
            cold_times.append(elapsed)
            if body.get('cached'):
                unexpected_hits += 1
        summarize("Latência cold", cold_times)
        if unexpected_hits:
            print(f"  ℹ️  {unexpected_hits} cidade(s) já estavam em cache")

        # Teste 2: repetições (hit esperado, cachedAt estável)
        print("\n🔥 Teste 2: requisições WARM")
        print("-" * 70)
        warm_times, hits, unstable = [], 0, 0
        first_cached_at = {}
        for _ in range(warm_rounds):
            for city in cities:
                elapsed, status, body = await timed_get(session, url, city)
                if status != 200:
                    errors += 1
                    continue
                warm_times.append(elapsed)
                if body.get('cached'):
                    hits += 1
                    cached_at = body.get('cachedAt')
                    if first_cached_at.setdefault(city, cached_at) != cached_at:
                        unstable += 1
        summarize("Latência warm", warm_times)
        total_warm = warm_rounds * len(cities)
        print(f"  • Hit rate: {(hits / total_warm) * 100 if total_warm else 0:.1f}% ({hits}/{total_warm})")
        if unstable:
            print(f"  ⚠️  cachedAt mudou em {unstable} leitura(s) (entrada expirou e foi regravada)")

        # Teste 3: rajada paralela na mesma cidade
        print("\n⚡ Teste 3: 20 requisições PARALELAS (mesma cidade)")
        print("-" * 70)
        start = time.perf_counter()
        results = await asyncio.gather(
            *(timed_get(session, url, cities[0]) for _ in range(20)),
            return_exceptions=True
        )
        elapsed_parallel = (time.perf_counter() - start) * 1000
        failures = sum(1 for r in results if isinstance(r, Exception) or r[1] != 200)
        print(f"  • Tempo total: {elapsed_parallel:.2f}ms | Falhas: {failures}/20")

    print("\n" + "=" * 70)
    print("📊 ANÁLISE FINAL")
    print("=" * 70)
    if cold_times and warm_times:
        speedup = statistics.mean(cold_times) / max(statistics.mean(warm_times), 0.001)
        print(f"  • Warm é {speedup:.1f}x mais rápido que cold")
    print(f"  • Erros HTTP: {errors}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Mede latência cold/warm do cache de clima")
    parser.add_argument('--base-url', default='http://localhost:3000')
    parser.add_argument('--rounds', type=int, default=5, help="rodadas de requisições warm")
    parser.add_argument('--cities', nargs='*', default=DEFAULT_CITIES)
    args = parser.parse_args()

    asyncio.run(analyze(args.base_url, args.cities, args.rounds))


if __name__ == '__main__':
    main()
