"""Hello World: the simplest routekit app.

Demonstrates literal and typed routes, optional segments, return-value
handling, Response chaining and reverse routing.

Run:
    python app.py
"""

from routekit import App, AppConfig, Response

app = App(AppConfig(not_found_body="Nothing here"))


@app.get("/", name="home")
def index(ctx):
    return "Hello, World!"


@app.get("/greet/{name}", name="greet")
def greet(ctx, name):
    return f"Hello, {name}!"


@app.get("/posts/{page}?:int")
def posts(ctx, page):
    return f"Page {page or 1}"


@app.get("/api/status")
def status(ctx):
    return {"status": "ok"}


@app.get("/custom")
def custom(ctx):
    return Response("Created").with_status(201).with_header("X-Custom", "routekit")


@app.get("/links")
def links(ctx):
    return {"home": app.url_for("home"), "alice": app.url_for("greet", name="alice")}


if __name__ == "__main__":
    app.run()
