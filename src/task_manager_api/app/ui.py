from __future__ import annotations

from html import escape

from .models import TaskPriority, TaskStatus


def render_homepage(*, app_name: str = "task-manager-api", user_header: str = "x-user-id") -> str:
    return (
        _PAGE.replace("{{APP_NAME}}", escape(app_name))
        .replace("{{USER_HEADER}}", escape(user_header))
        .replace("{{PRIORITY_OPTIONS}}", _options(TaskPriority))
        .replace("{{STATUS_OPTIONS}}", _options(TaskStatus))
    )


def _options(values: type[TaskPriority] | type[TaskStatus]) -> str:
    return "\n".join(
        f'            <option value="{escape(member.value)}">{escape(member.value)}</option>'
        for member in values
    )


_PAGE = """
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Task Console</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link
    href="https://fonts.googleapis.com/css2?family=Space+Grotesk:wght@400;500;700&display=swap"
    rel="stylesheet"
  >
  <link
    href="https://fonts.googleapis.com/css2?family=IBM+Plex+Mono:wght@400;500&display=swap"
    rel="stylesheet"
  >
  <style>
    :root {
      --bg: #f3efe6;
      --panel: #fffaf0;
      --ink: #112433;
      --muted: #5c6b74;
      --accent: #0f8b8d;
      --accent-strong: #136f63;
      --line: #d7d1c3;
      --warn: #b00020;
    }
    * { box-sizing: border-box; }
    body {
      margin: 0;
      min-height: 100vh;
      font-family: "Space Grotesk", sans-serif;
      color: var(--ink);
      background: var(--bg);
    }
    .wrap {
      max-width: 1000px;
      margin: 24px auto;
      padding: 0 16px 24px;
      display: grid;
      gap: 16px;
    }
    .hero, .card {
      background: var(--panel);
      border: 1px solid var(--line);
      border-radius: 16px;
      box-shadow: 0 8px 22px rgba(17, 36, 51, 0.08);
    }
    .hero {
      padding: 20px;
      display: flex;
      flex-wrap: wrap;
      align-items: center;
      justify-content: space-between;
      gap: 10px;
    }
    .title { margin: 0; font-size: clamp(1.3rem, 2.5vw, 2rem); }
    .sub { margin: 6px 0 0; color: var(--muted); }
    .card { padding: 16px; }
    .card h2 { margin: 0 0 12px; font-size: 1.1rem; }
    .grid { display: grid; grid-template-columns: 1fr 1fr; gap: 14px; }
    label { display: block; margin-bottom: 6px; font-weight: 700; font-size: 0.92rem; }
    textarea, input, select {
      width: 100%;
      border: 1px solid var(--line);
      border-radius: 12px;
      padding: 10px 12px;
      font-family: "IBM Plex Mono", monospace;
      font-size: 0.9rem;
      background: #fff;
      color: var(--ink);
    }
    textarea { min-height: 96px; resize: vertical; }
    .row { display: flex; gap: 10px; flex-wrap: wrap; margin-top: 12px; }
    button {
      border: none;
      border-radius: 10px;
      padding: 10px 14px;
      font-family: "Space Grotesk", sans-serif;
      font-weight: 700;
      cursor: pointer;
    }
    .primary { background: var(--accent); color: #fff; }
    .secondary { background: #edf6f5; color: var(--accent-strong); }
    .toast { margin: 0; font-family: "IBM Plex Mono", monospace; font-size: 0.9rem; }
    .error { color: var(--warn); }
    pre {
      margin: 0;
      overflow: auto;
      max-height: 320px;
      background: #112433;
      color: #ebf7f7;
      border-radius: 12px;
      padding: 14px;
      font-family: "IBM Plex Mono", monospace;
      font-size: 0.82rem;
    }
    @media (max-width: 780px) { .grid { grid-template-columns: 1fr; } }
  </style>
</head>
<body>
  <main class="wrap">
    <section class="hero">
      <div>
        <h1 class="title">Task Console</h1>
        <p class="sub">{{APP_NAME}}: create tasks and track their status.</p>
      </div>
      <div>
        <label for="userId">User ID ({{USER_HEADER}})</label>
        <input id="userId" placeholder="your user id">
      </div>
    </section>

    <section class="card">
      <h2>New task</h2>
      <div class="grid">
        <div>
          <label for="createTitle">Title</label>
          <input id="createTitle" maxlength="100">
          <label for="createDueDate" style="margin-top: 10px;">Due date</label>
          <input id="createDueDate" type="datetime-local">
        </div>
        <div>
          <label for="createDescription">Description</label>
          <textarea id="createDescription" maxlength="500"></textarea>
        </div>
      </div>
      <div class="row">
        <button class="primary" id="createBtn">Create Task</button>
      </div>
    </section>

    <section class="card">
      <h2>Edit task</h2>
      <div class="row" style="margin-top: 0;">
        <input id="taskId" placeholder="task id" style="flex: 1;">
        <button class="secondary" id="loadBtn">Load</button>
      </div>
      <div class="grid" style="margin-top: 12px;">
        <div>
          <label for="editTitle">Title</label>
          <input id="editTitle" maxlength="100">
          <label for="editDueDate" style="margin-top: 10px;">Due date</label>
          <input id="editDueDate" type="datetime-local">
          <label for="editPriority" style="margin-top: 10px;">Priority</label>
          <select id="editPriority">
{{PRIORITY_OPTIONS}}
          </select>
          <label for="editStatus" style="margin-top: 10px;">Status</label>
          <select id="editStatus">
{{STATUS_OPTIONS}}
          </select>
        </div>
        <div>
          <label for="editDescription">Description</label>
          <textarea id="editDescription" maxlength="500"></textarea>
        </div>
      </div>
      <div class="row">
        <button class="primary" id="saveBtn">Save Changes</button>
      </div>
    </section>

    <section class="card">
      <p class="toast" id="toast">Ready.</p>
      <pre id="output" style="margin-top: 10px;">No response yet.</pre>
    </section>
  </main>

  <script>
    const userHeader = "{{USER_HEADER}}";
    const byId = (id) => document.getElementById(id);
    const toast = byId("toast");
    const output = byId("output");

    function notify(message, isError = false) {
      toast.textContent = message;
      toast.classList.toggle("error", isError);
    }

    function toIso(localValue) {
      return localValue ? new Date(localValue).toISOString() : null;
    }

    function toLocalInput(isoValue) {
      if (!isoValue) return "";
      const date = new Date(isoValue);
      const offset = date.getTimezoneOffset() * 60000;
      return new Date(date.getTime() - offset).toISOString().slice(0, 16);
    }

    function describeError(error) {
      const details = (error.details || []).map((d) => `${d.field}: ${d.message}`);
      return [error.message, ...details].join(" | ");
    }

    async function callApi(url, method, body) {
      const userId = byId("userId").value.trim();
      const headers = { "Content-Type": "application/json" };
      if (userId) headers[userHeader] = userId;
      const response = await fetch(url, {
        method,
        headers,
        body: body === undefined ? undefined : JSON.stringify(body),
      });
      const envelope = await response.json();
      output.textContent = JSON.stringify(envelope, null, 2);
      if (!envelope.success) {
        throw new Error(describeError(envelope.error));
      }
      return envelope.data;
    }

    function fillEditForm(task) {
      byId("taskId").value = task.task_id;
      byId("editTitle").value = task.title;
      byId("editDescription").value = task.description || "";
      byId("editDueDate").value = toLocalInput(task.due_date);
      byId("editPriority").value = task.priority;
      byId("editStatus").value = task.status;
    }

    byId("createBtn").addEventListener("click", async () => {
      try {
        const description = byId("createDescription").value.trim();
        const task = await callApi("/api/internal/task", "POST", {
          title: byId("createTitle").value.trim(),
          description: description || null,
          due_date: toIso(byId("createDueDate").value),
        });
        fillEditForm(task);
        notify("Task created.");
      } catch (err) {
        notify(String(err.message || err), true);
      }
    });

    byId("loadBtn").addEventListener("click", async () => {
      try {
        const taskId = byId("taskId").value.trim();
        if (!taskId) throw new Error("Task ID is required.");
        fillEditForm(await callApi(`/api/internal/task/${taskId}`, "GET"));
        notify("Task loaded.");
      } catch (err) {
        notify(String(err.message || err), true);
      }
    });

    byId("saveBtn").addEventListener("click", async () => {
      try {
        const taskId = byId("taskId").value.trim();
        if (!taskId) throw new Error("Task ID is required.");
        const description = byId("editDescription").value.trim();
        const task = await callApi(`/api/internal/task/${taskId}`, "PUT", {
          title: byId("editTitle").value.trim(),
          description: description || null,
          due_date: toIso(byId("editDueDate").value),
          priority: byId("editPriority").value,
          status: byId("editStatus").value,
        });
        fillEditForm(task);
        notify(`Task saved with status: ${task.status}`);
      } catch (err) {
        notify(String(err.message || err), true);
      }
    });
  </script>
</body>
</html>
"""
