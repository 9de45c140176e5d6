"""Static HTML page for trying the scoring endpoint from a browser."""

DEMO_HTML = """<!doctype html>
<html>
<head>
<meta charset="utf-8">
<title>Telco Churn - Demo</title>
<style>
  body{font-family:system-ui,Segoe UI,Roboto,Helvetica,Arial,sans-serif;max-width:720px;margin:40px auto;padding:0 12px}
  label{display:block;margin:8px 0}
  input{padding:6px 8px;width:320px}
  button{padding:8px 14px;margin-top:12px;cursor:pointer}
  pre{background:#111;color:#0f0;padding:12px;border-radius:8px;white-space:pre-wrap}
</style>
</head>
<body>
<h1>Telco Churn - Demo</h1>
<form id="score-form">
  <label>CustomerID <input id="CustomerID" value="C9999"></label>
  <label>Gender <input id="Gender" value="Female"></label>
  <label>Tenure <input id="Tenure" type="number" step="any" value="3"></label>
  <label>MonthlyCharges <input id="MonthlyCharges" type="number" step="any" value="120"></label>
  <label>TotalCharges <input id="TotalCharges" type="number" step="any" value="360"></label>
  <label>Contract <input id="Contract" value="Month-to-month"></label>
  <label>InternetService <input id="InternetService" value="Fiber optic"></label>
  <button type="submit">Score</button>
</form>
<p><a href="/docs">API docs</a></p>
<pre id="out"></pre>
<script>
const field = (id) => document.getElementById(id).value;
document.getElementById("score-form").addEventListener("submit", async (e) => {
  e.preventDefault();
  const body = {
    CustomerID: field("CustomerID"),
    Gender: field("Gender"),
    Tenure: parseFloat(field("Tenure")),
    MonthlyCharges: parseFloat(field("MonthlyCharges")),
    TotalCharges: parseFloat(field("TotalCharges")),
    Contract: field("Contract"),
    InternetService: field("InternetService")
  };
  const r = await fetch("/score", {
    method: "POST",
    headers: {"Content-Type": "application/json"},
    body: JSON.stringify(body)
  });
  document.getElementById("out").textContent = await r.text();
});
</script>
</body>
</html>
"""
