from raw_mailer.prometheus import MailMetrics


def test_mail_metrics_counters():
    metrics = MailMetrics()

    metrics.inc_sent()
    metrics.inc_sent()
    metrics.inc_error()
    metrics.inc_suppressed("disabled")
    metrics.inc_suppressed("")

    output = metrics.generate_latest()
    assert b"rmail_sent_total 2.0" in output
    assert b"rmail_errors_total 1.0" in output
    assert b'rmail_suppressed_total{reason="disabled"} 1.0' in output
    assert b'rmail_suppressed_total{reason="unknown"} 1.0' in output
