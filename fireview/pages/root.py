"""Console page: connect, manage collections, browse and edit documents.

A single static page driving the /api/v1 endpoints with fetch(). It keeps
no state of its own beyond what is on screen; the session lives server-side.
"""

from html import escape

_CONSOLE_HTML = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>__APP_NAME__</title>
    <style>
        * { box-sizing: border-box; }
        body {
            font-family: system-ui, sans-serif;
            margin: 0;
            background: #0b0b0b;
            color: #e0e0e0;
        }
        header {
            display: flex;
            align-items: center;
            justify-content: space-between;
            padding: 1rem 1.5rem;
            border-bottom: 1px solid #1f1f1f;
        }
        header h1 { font-size: 1.25rem; margin: 0; color: #fff; }
        main { display: grid; grid-template-columns: 260px 1fr; min-height: calc(100vh - 60px); }
        aside { border-right: 1px solid #1f1f1f; padding: 1rem; }
        section { padding: 1rem 1.5rem; overflow-x: auto; }
        input, textarea, button {
            font: inherit;
            background: #141414;
            color: #e0e0e0;
            border: 1px solid #2a2a2a;
            padding: 0.4rem 0.6rem;
        }
        button { cursor: pointer; }
        button:hover { border-color: #555; }
        button.danger { border-color: #6b1d1d; color: #f19999; }
        textarea { width: 100%; min-height: 10rem; font-family: ui-monospace, monospace; }
        ul { list-style: none; padding: 0; }
        li { display: flex; justify-content: space-between; padding: 0.25rem 0; }
        li.selected > span { color: #fff; font-weight: 600; }
        li > span { cursor: pointer; }
        table { border-collapse: collapse; width: 100%; font-size: 0.875rem; }
        th, td { border-bottom: 1px solid #1f1f1f; padding: 0.4rem; text-align: left; vertical-align: top; }
        td pre { margin: 0; white-space: pre-wrap; max-width: 40ch; }
        .row { display: flex; gap: 0.5rem; flex-wrap: wrap; margin-bottom: 0.75rem; }
        .muted { color: #777; }
        .error { color: #f19999; }
        .hidden { display: none; }
        #toasts { position: fixed; right: 1rem; bottom: 1rem; width: 320px; }
        .toast { background: #161616; border: 1px solid #2a2a2a; padding: 0.6rem 0.8rem; margin-top: 0.5rem; }
        .toast.destructive { border-color: #6b1d1d; }
        .toast strong { display: block; }
        #summary { white-space: pre-wrap; background: #111; padding: 0.75rem; }
    </style>
</head>
<body>
    <header>
        <h1>__APP_NAME__</h1>
        <form id="connect-form" class="row">
            <input id="project-id" placeholder="Firebase project ID" autocomplete="off">
            <button type="submit" id="connect-btn">Connect</button>
            <button type="button" id="disconnect-btn" class="hidden">Disconnect</button>
            <span id="status" class="muted"></span>
        </form>
    </header>
    <main>
        <aside>
            <form id="collection-form" class="row">
                <input id="collection-name" placeholder="collection/path">
                <button type="submit">Add</button>
            </form>
            <ul id="collections"></ul>
        </aside>
        <section>
            <div class="row">
                <input id="search" placeholder="Search ID or values">
                <input id="field" placeholder="Field">
                <input id="value" placeholder="Value">
                <button id="refresh-btn">Refresh</button>
                <button id="new-btn">New document</button>
                <input id="import-file" type="file" accept="application/json,.json" class="hidden">
                <button id="import-btn">Bulk import</button>
                <button id="summary-btn">Summarize</button>
            </div>
            <p id="counts" class="muted"></p>
            <p id="fetch-error" class="error"></p>
            <div id="editor" class="hidden">
                <div class="row">
                    <input id="editor-id" placeholder="Document ID (optional)">
                    <button id="save-btn">Save</button>
                    <button id="cancel-btn">Cancel</button>
                </div>
                <textarea id="editor-data">{}</textarea>
            </div>
            <table>
                <thead><tr><th>ID</th><th>Data</th><th></th></tr></thead>
                <tbody id="documents"></tbody>
            </table>
            <h3>Summary</h3>
            <div id="summary" class="muted">No summary yet.</div>
        </section>
    </main>
    <div id="toasts"></div>
    <script>
    const API = "/api/v1";
    const MAX_IMPORT_BYTES = __IMPORT_MAX_BYTES__;
    const $ = (id) => document.getElementById(id);
    let editing = null;
    let pendingDelete = null;

    async function api(method, path, body) {
        const opts = { method, headers: {} };
        if (body !== undefined) {
            opts.headers["Content-Type"] = "application/json";
            opts.body = JSON.stringify(body);
        }
        const resp = await fetch(API + path, opts);
        const data = await resp.json().catch(() => null);
        await drainToasts();
        if (!resp.ok) throw new Error((data && data.message) || resp.statusText);
        return data;
    }

    async function drainToasts() {
        const resp = await fetch(API + "/notifications");
        if (!resp.ok) return;
        for (const n of await resp.json()) {
            const el = document.createElement("div");
            el.className = "toast " + n.variant;
            el.innerHTML = "<strong></strong><span></span>";
            el.querySelector("strong").textContent = n.title;
            el.querySelector("span").textContent = n.message;
            $("toasts").appendChild(el);
            setTimeout(() => el.remove(), 6000);
        }
    }

    function attempt(fn) {
        return (ev) => { if (ev) ev.preventDefault(); fn(ev).catch(() => {}); };
    }

    async function loadStatus() {
        const s = await api("GET", "/connection");
        $("status").textContent = s.is_connected ? "Connected: " + s.project_id : (s.error || s.status);
        $("disconnect-btn").classList.toggle("hidden", !s.is_connected);
        if (s.project_id) $("project-id").value = s.project_id;
    }

    async function loadCollections() {
        const c = await api("GET", "/collections");
        const list = $("collections");
        list.innerHTML = "";
        for (const entry of c.collections) {
            const li = document.createElement("li");
            if (entry.name === c.selected) li.className = "selected";
            const name = document.createElement("span");
            name.textContent = entry.name;
            name.onclick = attempt(async () => {
                await api("PUT", "/collections/selected", { name: entry.name });
                await refreshAll();
            });
            const remove = document.createElement("button");
            remove.textContent = "x";
            remove.onclick = attempt(async () => {
                await api("DELETE", "/collections?name=" + encodeURIComponent(entry.name));
                await refreshAll();
            });
            li.append(name, remove);
            list.appendChild(li);
        }
    }

    async function loadDocuments() {
        const q = new URLSearchParams({ search: $("search").value, field: $("field").value, value: $("value").value });
        const view = await api("GET", "/documents?" + q);
        $("counts").textContent = view.collection
            ? `Showing ${view.displayed_count} of ${view.original_count} documents in ${view.collection}`
            : "Select a collection.";
        $("fetch-error").textContent = view.error || "";
        const body = $("documents");
        body.innerHTML = "";
        for (const doc of view.documents) {
            const tr = document.createElement("tr");
            const id = document.createElement("td");
            id.textContent = doc.id;
            const data = document.createElement("td");
            const pre = document.createElement("pre");
            pre.textContent = JSON.stringify(doc.data, null, 2);
            data.appendChild(pre);
            const actions = document.createElement("td");
            const edit = document.createElement("button");
            edit.textContent = "Edit";
            edit.onclick = () => openEditor(doc);
            const del = document.createElement("button");
            del.className = "danger";
            del.textContent = pendingDelete === doc.id ? "Confirm delete" : "Delete";
            del.onclick = attempt(async () => {
                if (pendingDelete !== doc.id) {
                    pendingDelete = doc.id;
                    await loadDocuments();
                    return;
                }
                pendingDelete = null;
                await api("DELETE", "/documents/" + encodeURIComponent(doc.id));
                await loadDocuments();
            });
            actions.append(edit, del);
            tr.append(id, data, actions);
            body.appendChild(tr);
        }
    }

    async function loadSummary() {
        const s = await api("GET", "/summary");
        $("summary").textContent = s.summary || "No summary yet.";
    }

    function openEditor(doc) {
        editing = doc ? doc.id : null;
        $("editor-id").value = doc ? doc.id : "";
        $("editor-id").disabled = !!doc;
        $("editor-data").value = JSON.stringify(doc ? doc.data : {}, null, 2);
        $("editor").classList.remove("hidden");
    }

    async function refreshAll() {
        await loadStatus();
        await loadCollections();
        await loadDocuments();
        await loadSummary();
    }

    $("connect-form").onsubmit = attempt(async () => {
        await api("POST", "/connection", { project_id: $("project-id").value });
        await refreshAll();
    });
    $("disconnect-btn").onclick = attempt(async () => {
        await api("DELETE", "/connection");
        await refreshAll();
    });
    $("collection-form").onsubmit = attempt(async () => {
        await api("POST", "/collections", { name: $("collection-name").value });
        $("collection-name").value = "";
        await refreshAll();
    });
    for (const id of ["search", "field", "value"]) $(id).oninput = attempt(loadDocuments);
    $("refresh-btn").onclick = attempt(async () => {
        await api("POST", "/documents/refresh");
        await loadDocuments();
    });
    $("new-btn").onclick = () => openEditor(null);
    $("cancel-btn").onclick = () => $("editor").classList.add("hidden");
    $("save-btn").onclick = attempt(async () => {
        let data;
        try {
            data = JSON.parse($("editor-data").value);
        } catch (e) {
            $("fetch-error").textContent = "Invalid JSON: " + e.message;
            return;
        }
        if (editing) {
            await api("PATCH", "/documents/" + encodeURIComponent(editing), { data });
        } else {
            await api("POST", "/documents", { data, document_id: $("editor-id").value || null });
        }
        $("editor").classList.add("hidden");
        await loadDocuments();
    });
    $("import-btn").onclick = () => $("import-file").click();
    $("import-file").onchange = attempt(async () => {
        const file = $("import-file").files[0];
        $("import-file").value = "";
        if (!file) return;
        if (!file.name.endsWith(".json")) {
            $("fetch-error").textContent = "File must be a JSON (.json) file.";
            return;
        }
        if (file.size > MAX_IMPORT_BYTES) {
            $("fetch-error").textContent = "File is too large to import.";
            return;
        }
        await api("POST", "/documents/import", { json_array_data: await file.text() });
        await loadDocuments();
    });
    $("summary-btn").onclick = attempt(async () => {
        $("summary").textContent = "Summarizing...";
        try {
            await api("POST", "/summary", {});
        } finally {
            await loadSummary();
        }
    });

    refreshAll().catch(() => {});
    </script>
</body>
</html>
"""


def render_root_page(app_name: str, import_max_bytes: int) -> str:
    """Return HTML for the console page."""
    return _CONSOLE_HTML.replace("__APP_NAME__", escape(app_name)).replace(
        "__IMPORT_MAX_BYTES__", str(int(import_max_bytes))
    )
