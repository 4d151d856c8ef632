"""zabbix-watch — Zabbix host/trigger snapshots persisted to DynamoDB."""
