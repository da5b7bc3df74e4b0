"""Controllers and resources: conventional routes from class methods.

``PhotoController`` gets the CRUD table from ``app.resource()``;
``ReportController`` is routed by its ``<verbs><Words>`` method names.

Run:
    python app.py
"""

from routekit import App

app = App()

PHOTOS = {1: "sunset.jpg", 2: "harbour.jpg"}


@app.resource("/photos")
class PhotoController:
    def index(self, ctx):
        return [{"id": pid, "file": name} for pid, name in PHOTOS.items()]

    def show(self, ctx, photo_id):
        name = PHOTOS.get(int(photo_id))
        if name is None:
            ctx.json({"error": "no such photo"}, status=404)
            return None
        return {"id": int(photo_id), "file": name}

    def store(self, ctx):
        new_id = max(PHOTOS, default=0) + 1
        PHOTOS[new_id] = ctx.request.data.get("file", "untitled.jpg")
        ctx.json({"id": new_id}, status=201)

    def destroy(self, ctx, ids):
        removed = [pid for pid in map(int, ids.split(",")) if PHOTOS.pop(pid, None)]
        return {"removed": removed}


@app.controller("/reports")
class ReportController:
    def getIndex(self, ctx, *args):
        return "Reports"

    def getMonthly(self, ctx, *args):
        return f"Monthly report {'/'.join(args)}".strip()

    def get_postExport(self, ctx, *args):
        return f"Export via {ctx.request.method}"


if __name__ == "__main__":
    app.run()
