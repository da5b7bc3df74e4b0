"""Admin area: groups, named routes, permissions and scoped middleware.

Everything under ``/admin`` needs an ``X-Token`` header, except the
login page. Some admin routes carry the role they require; a second
before-callback checks it against the token. An after-callback stamps
every response.

Run:
    python app.py
"""

from routekit import App, Response

app = App()

TOKENS = {"secret-admin": "admin", "secret-editor": "editor"}


@app.group("/admin")
def admin(app):
    @app.get("/login")
    def login(ctx):
        return "Please log in"

    @app.get("/dashboard", permissions="editor")
    def dashboard(ctx):
        return "Dashboard"

    @app.get("/users/{id}:int", name="users.show")
    def show_user(ctx, user_id):
        return {"id": int(user_id)}

    @app.get("/users", permissions="admin")
    def users(ctx):
        return [app.url_for("admin.users.show", id=n) for n in (1, 2)]


def _role(ctx):
    return TOKENS.get(ctx.request.headers.get("x-token", ""))


@app.before("/*!/admin/login|/public")
def require_token(ctx):
    if _role(ctx) is None:
        ctx.absorb(Response("Unauthorized", status=401))
        return False
    return None


@app.before("/admin")
def check_role(ctx):
    needed = ctx.request.permissions
    if needed and _role(ctx) not in (needed, "admin"):
        ctx.absorb(Response("Forbidden", status=403))
        return False
    return None


@app.after("/*")
def stamp(ctx):
    ctx.set_header("X-Served-By", "routekit")


@app.get("/public")
def public(ctx):
    return "Open to everyone"


if __name__ == "__main__":
    app.run()
