"""Jinja2 templates for the HTML report."""

HTML_REPORT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{ page_title }}</title>
  <style>
    body { font-family: -apple-system, "Segoe UI", Roboto, sans-serif; margin: 0; color: #222; }
    header { background: #2d3e50; color: #fff; padding: 16px 32px; }
    main { padding: 24px 32px; }
    table { border-collapse: collapse; width: 100%; margin-bottom: 24px; }
    th, td { text-align: left; padding: 6px 10px; border-bottom: 1px solid #ddd; }
    .passed { color: #2e7d32; font-weight: bold; }
    .failed { color: #c62828; font-weight: bold; }
    .cards { display: flex; gap: 16px; margin-bottom: 24px; }
    .card { flex: 1; padding: 16px; background: #f5f5f5; border-radius: 4px; }
    .error { font-family: monospace; white-space: pre-wrap; color: #c62828; font-size: 12px; }
    footer { text-align: center; margin-top: 20px; padding: 20px; background-color: #f5f5f5; }
  </style>
</head>
<body>
<header>
  <h1>{{ report_name }}</h1>
  <p>Status: <span class="{{ summary.status | lower }}">{{ summary.status }}</span></p>
</header>
<main>
  <div class="cards">
    <div class="card">
      <h3>Scenarios</h3>
      <p>{{ summary.scenarios.total }} total,
        <span class="passed">{{ summary.scenarios.passed }} passed</span>,
        <span class="failed">{{ summary.scenarios.failed }} failed</span></p>
      <p>Pass rate: {{ summary.scenarios.passRate }}</p>
    </div>
    <div class="card">
      <h3>Steps</h3>
      <p>{{ summary.steps.total }} total,
        <span class="passed">{{ summary.steps.passed }} passed</span>,
        <span class="failed">{{ summary.steps.failed }} failed</span></p>
      <p>Pass rate: {{ summary.steps.passRate }}</p>
    </div>
  </div>

  <h2>{{ custom_title }}</h2>
  <table>
    {% for label, value in custom_data %}
    <tr><th>{{ label }}</th><td>{{ value }}</td></tr>
    {% endfor %}
  </table>

  <h2>Features</h2>
  {% for feature in features %}
  <h3>{{ feature.name }} <small>({{ feature.uri }})</small></h3>
  <p>{{ feature.passed_count }} passed, {{ feature.failed_count }} failed</p>
  <table>
    <tr><th>Scenario</th><th>Steps</th><th>Duration</th><th>Status</th></tr>
    {% for scenario in feature.scenarios %}
    <tr>
      <td>
        {{ scenario.name }}
        {% if scenario.error_message %}<div class="error">{{ scenario.error_message }}</div>{% endif %}
      </td>
      <td>{{ scenario.steps_passed }}/{{ scenario.steps_total }}</td>
      <td>{{ "%.0f" | format(scenario.duration_ms) }} ms</td>
      <td class="{{ 'passed' if scenario.passed else 'failed' }}">
        {{ 'passed' if scenario.passed else 'failed' }}
      </td>
    </tr>
    {% endfor %}
  </table>
  {% endfor %}
</main>
<footer>
  <p><strong>{{ project }}</strong></p>
  <p>Automated E2E Testing Framework | {{ summary.framework }}</p>
  <p>Browser: {{ browser }} | Device: {{ device }}</p>
  <p>Generated: {{ summary.timestamp }}</p>
</footer>
</body>
</html>
"""
