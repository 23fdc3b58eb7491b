import pytest
from fastapi.testclient import TestClient

from styleprint.main import app
from styleprint.routes import design


@pytest.fixture
def client():
    design._rate_limit_map.clear()
    with TestClient(app) as c:
        yield c
    design._rate_limit_map.clear()


@pytest.fixture
def landing_page() -> str:
    return """<!DOCTYPE html>
<html>
<head>
<style>
  :root { --brand: #3366FF; }
  body { font-family: "Inter", sans-serif; color: #111; margin: 0; }
  h1 { font-size: 3rem; font-weight: 700; line-height: 1.1; }
  .card { border-radius: 12px; box-shadow: 0 1px 3px rgba(0, 0, 0, 0.2); padding: 24px; }
  .btn { transition: background-color 150ms ease; background: hsl(220, 90%, 56%); }
  .modal { z-index: 50; opacity: 0.95; }
  @keyframes fade-in { from { opacity: 0 } to { opacity: 1 } }
  @media (min-width: 768px) { .grid { gap: 2rem; } }
</style>
</head>
<body>
  <header class="site-header"><nav class="navbar"><a class="btn" href="/">Home</a></nav></header>
  <main>
    <article class="card"><h2>Fast</h2><p>Ships quickly.</p></article>
    <button class="button primary">Get started</button>
  </main>
  <footer>&copy; Acme</footer>
</body>
</html>"""
