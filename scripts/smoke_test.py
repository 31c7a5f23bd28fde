"""
Script de prueba contra un servidor corriendo
Verifica health, JSON, página HTML y refresco forzado
"""
import sys
import time

import requests


BASE_URL = "http://localhost:8003"


def print_separator(title=""):
    """Imprime un separador visual"""
    print("\n" + "="*60)
    if title:
        print(f"  {title}")
        print("="*60)
    print()


def test_health():
    """Verifica el estado del servidor"""
    print_separator("1. HEALTH CHECK")

    response = requests.get(f"{BASE_URL}/health", timeout=10)

    if response.status_code != 200:
        print("❌ Servidor no disponible")
        return False

    data = response.json()
    cache = data["cache"]
    print(f"✅ Servidor funcionando ({data['status']})")
    print(f"  - Fuente: {data['source_url']}")
    print(f"  - Ligas: {', '.join(data['leagues'])}")
    print(f"  - Último refresco: {cache['last_refresh'] or 'nunca'}")
    print(f"  - Días / partidos: {cache['days']} / {cache['matches']}")
    return True


def test_schedule_json():
    """Pide la programación en JSON y muestra los partidos"""
    print_separator("2. /schedule.json")

    start_time = time.time()
    response = requests.get(f"{BASE_URL}/schedule.json", timeout=60)
    elapsed = time.time() - start_time

    if response.status_code != 200:
        print(f"❌ Error: {response.status_code}")
        print(response.text)
        return None

    data = response.json()
    print(f"✅ {len(data)} días en {elapsed:.3f}s ({response.headers.get('content-type')})")
    for day, matches in data.items():
        print(f"\n📅 {day}")
        for match in matches:
            print(f"  * {match['Time']} {match['Name']} ({match['League']}, {match['Channel']})")
    return data


def test_schedule_page():
    """La página HTML debe responder con el listado"""
    print_separator("3. PÁGINA HTML")

    response = requests.get(f"{BASE_URL}/", timeout=60)
    if response.status_code == 200 and "Fotboll på TV:n." in response.text:
        print(f"✅ Página OK ({len(response.content)} bytes)")
        return True
    print(f"❌ Error: {response.status_code}")
    return False


def test_cache_hit():
    """Dos pedidos seguidos: el segundo debe salir del caché"""
    print_separator("4. DEMOSTRACIÓN DE CACHÉ")

    timings = []
    for attempt in (1, 2):
        start_time = time.time()
        requests.get(f"{BASE_URL}/schedule.json", timeout=60)
        timings.append(time.time() - start_time)
        print(f"📍 Intento {attempt}: {timings[-1]:.3f}s")

    if timings[1] < timings[0]:
        print(f"\n🚀 {timings[0] / max(timings[1], 1e-6):.1f}x más rápido con caché")


def force_refresh():
    """Fuerza un refresco ignorando el TTL"""
    print_separator("5. REFRESCO FORZADO")

    response = requests.post(f"{BASE_URL}/schedule/refresh", timeout=60)
    if response.status_code == 200:
        print(f"✅ {response.json()['message']}")
    else:
        print(f"❌ Error: {response.status_code} {response.text}")


def main():
    if not test_health():
        print("\n❌ Servidor no disponible. Asegúrate de que esté corriendo.")
        sys.exit(1)

    test_schedule_json()
    test_schedule_page()
    test_cache_hit()

    respuesta = input("\n¿Deseas forzar un refresco? (s/n): ").strip().lower()
    if respuesta == "s":
        force_refresh()
        test_health()

    print("\n✅ Pruebas completadas!")


if __name__ == "__main__":
    if len(sys.argv) > 1:
        BASE_URL = sys.argv[1].rstrip("/")
    try:
        main()
    except KeyboardInterrupt:
        print("\n\n⚠️  Interrumpido por el usuario")
