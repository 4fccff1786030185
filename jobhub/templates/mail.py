"""HTML bodies for application status mails."""
from jinja2 import DictLoader, Environment

_LAYOUT = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{% block title %}{% endblock %} - {{ company_name }}</title>
  <style>
    body {
      font-family: Arial, sans-serif;
      margin: 0;
      padding: 0;
      color: #333;
    }

    .container {
      max-width: 600px;
      margin: 50px auto;
      padding: 30px;
      background-color: #f5f5f5;
      border-radius: 5px;
    }

    .header, .footer {
      text-align: center;
    }

    h1 {
      font-size: 24px;
      margin-bottom: 10px;
    }

    p {
      font-size: 16px;
      line-height: 1.5;
    }
  </style>
</head>
<body>
  <div class="container">
    <header class="header">
      {% block header %}{% endblock %}
    </header>
    <main class="content">
      {% block content %}{% endblock %}
    </main>
    <footer class="footer">
      {% block footer %}{% endblock %}
      <p>Sincerely,</p>
      <p>The {{ company_name }} Team</p>
    </footer>
  </div>
</body>
</html>
"""

_APPROVE = """{% extends "layout.html" %}
{% block title %}Job Application Successful{% endblock %}
{% block header %}
      <h1>Congratulations, {{ candidate_name }}!</h1>
      <p>Your application for the {{ job_title }} position at {{ company_name }} has been successful!</p>
{% endblock %}
{% block content %}
      <h2>Next Steps:</h2>
      <p>In the coming days, you will receive a separate email from our HR Department with the interview schedule and any additional information needed.</p>
{% endblock %}
{% block footer %}
      <p>We look forward to learning more about your qualifications and your potential contribution to our team.</p>
{% endblock %}
"""

_REJECTED = """{% extends "layout.html" %}
{% block title %}Job Application Update{% endblock %}
{% block header %}
      <h1>Thank You for Your Interest, {{ candidate_name }}</h1>
      <p>Application Update for the {{ job_title }} Position</p>
{% endblock %}
{% block content %}
      <p>Thank you for your interest in the {{ job_title }} position at {{ company_name }}. We appreciate the time you invested in applying.</p>
      <p>After careful consideration, we regret to inform you that we will not be moving forward with your application at this time.</p>
      <p>We encourage you to apply for future opportunities at {{ company_name }} that may be a better fit for your qualifications.</p>
{% endblock %}
"""

env = Environment(
    loader=DictLoader({
        "layout.html": _LAYOUT,
        "approve.html": _APPROVE,
        "rejected.html": _REJECTED,
    }),
    autoescape=True,
)


def _render(name: str, candidate_name: str, job_title: str, company_name: str) -> str:
    return env.get_template(name).render(
        candidate_name=candidate_name,
        job_title=job_title,
        company_name=company_name,
    )


def approve_template(candidate_name: str, job_title: str, company_name: str) -> str:
    return _render("approve.html", candidate_name, job_title, company_name)


def rejected_template(candidate_name: str, job_title: str, company_name: str) -> str:
    return _render("rejected.html", candidate_name, job_title, company_name)
