def test_routing_redirect_keeps_its_location(app):
    @app.route("/slashed/")
    def slashed():
        return "ok"

    resp = app.test_client().get("/slashed")
    assert resp.status_code == 308
    assert resp.headers["Location"].endswith("/slashed/")


def test_unknown_route_is_json(client):
    resp = client.get("/nowhere")
    assert resp.status_code == 404
    assert resp.get_json()["ok"] is False
