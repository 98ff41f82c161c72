"""
Health endpoint, app wiring, sample data and CLI commands.
"""

from almacen import create_app
from almacen.config import TestConfig
from almacen.models import Inventory, Movement, Product
from almacen.services.record_store import get_record_store
from almacen.seed import load_sample_data

from conftest import make_product


class SeededConfig(TestConfig):
    SEED_SAMPLE_DATA = True


class TestHealth:

    def test_healthy(self, client):
        resp = client.get("/api/health")

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["status"] == "healthy"
        assert body["checks"]["record_store"]["details"]["products"] == 0

    def test_degraded_on_drift(self, store, client):
        product = make_product(store, stock=50)
        store.get(Product, product["id"]).stock = 1
        store.commit()

        body = client.get("/api/health").get_json()

        assert body["status"] == "degraded"
        assert body["checks"]["stock_consistency"]["details"]["kinds"] == ["stock_mismatch"]

    def test_unknown_route_is_json(self, client):
        resp = client.get("/api/nothing-here")
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Not found"}

    def test_only_health_is_exposed(self, client):
        assert client.get("/api/version").status_code == 404

    def test_cors_for_dev_client(self, client):
        resp = client.get("/api/products", headers={"Origin": "http://localhost:5173"})
        assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"

        resp = client.get("/api/products", headers={"Origin": "http://evil.example"})
        assert "Access-Control-Allow-Origin" not in resp.headers


class TestSampleData:

    def test_seeded_on_startup(self):
        app = create_app(SeededConfig)
        client = app.test_client()

        products = client.get("/api/products").get_json()
        assert sorted(p["ref"] for p in products) == ["P001", "P002", "P003"]

        inventory = client.get("/api/inventory").get_json()
        assert sorted(i["unit"] for i in inventory) == ["Litros", "Sacos", "Unidades"]
        assert {i["status"] for i in inventory} == {"disponible"}

        movements = client.get("/api/movements").get_json()
        assert sorted(m["ref"] for m in movements) == ["MOV001", "MOV002"]

    def test_sample_movements_are_not_replayed(self, store):
        load_sample_data(store)

        stocks = sorted(p.stock for p in store.query(Product).all())
        assert stocks == [75, 150, 200]

    def test_seed_skips_non_empty_store(self, store):
        make_product(store)

        assert load_sample_data(store) == {"products": 0, "movements": 0}
        assert store.query(Movement).count() == 0

    def test_stores_are_independent_per_app(self):
        first = create_app(SeededConfig)
        second = create_app(TestConfig)

        with first.app_context():
            assert get_record_store().query(Product).count() == 3
        with second.app_context():
            assert get_record_store().query(Product).count() == 0


class TestCli:

    def test_status_band(self, app):
        runner = app.test_cli_runner()

        assert runner.invoke(args=["catalog", "status-band", "10"]).output.strip() == "bajo_stock"
        assert runner.invoke(args=["catalog", "status-band", "11"]).output.strip() == "disponible"

    def test_seed_then_check(self, app):
        runner = app.test_cli_runner()

        seeded = runner.invoke(args=["catalog", "seed"])
        assert seeded.exit_code == 0
        assert "Seeded 3 products" in seeded.output

        checked = runner.invoke(args=["catalog", "check"])
        assert checked.exit_code == 0
        assert "consistent" in checked.output

    def test_seed_reset(self, app):
        runner = app.test_cli_runner()
        runner.invoke(args=["catalog", "seed"])

        result = runner.invoke(args=["catalog", "seed", "--reset", "--yes"])

        assert result.exit_code == 0
        with app.app_context():
            assert get_record_store().query(Product).count() == 3

    def test_check_reports_drift(self, app):
        with app.app_context():
            store = get_record_store()
            product = make_product(store, stock=5)
            store.inventory_for_product(product["id"]).status = "disponible"
            store.commit()

        result = app.test_cli_runner().invoke(args=["catalog", "check"])

        assert result.exit_code == 1
        assert "[status_drift]" in result.output
        with app.app_context():
            assert get_record_store().query(Inventory).count() == 1


class TestEntryPoint:

    def test_dev_server_is_single_threaded(self, monkeypatch):
        import wsgi

        calls = []
        monkeypatch.setattr(wsgi.app, "run", lambda **kwargs: calls.append(kwargs))

        wsgi.main()

        assert calls == [{"host": "127.0.0.1", "port": 5001, "threaded": False}]
