"""
Seed snapshot for the enterprise store.

Seeds:
- Items, BOMs, warehouses, locations, stock lots and the initial move journal
- Routing, work centers, production/work orders, quality and maintenance records
- Suppliers, customers, purchase/sales orders and an invoice
- Tasks, playbooks, passports with their devices and templates, and workforce reference data

Every id is literal and every timestamp is derived from one reference time, so
resetting the store reproduces the snapshot exactly.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from enterprise_ledger.core.ids import utcnow
from enterprise_ledger.services.locations import infer_location_roles
from enterprise_ledger.state.store import EnterpriseState

# Computed once per process; reset() restores against this instant.
SEED_REFERENCE_TIME = utcnow()

_HOUR = timedelta(hours=1)
_DAY = timedelta(days=1)


# PUBLIC_INTERFACE
def build_seed_state(now: Optional[datetime] = None) -> EnterpriseState:
    """Build the seed snapshot relative to ``now`` (defaults to the process reference time)."""
    now = now or SEED_REFERENCE_TIME
    state = EnterpriseState.model_validate(
        {
            "inventory": _inventory_seed(now),
            "mes": _mes_seed(now),
            "erp": _erp_seed(now),
            "tasks": _tasks_seed(now),
            "passports": _passports_seed(now),
            "automation": _automation_seed(now),
            "workforce": _workforce_seed(now),
        }
    )
    # Role mapping is bootstrapped from the location naming convention.
    for warehouse in state.inventory.warehouses:
        state.inventory.location_roles[warehouse.id] = infer_location_roles(
            state.inventory.locations, warehouse.id
        )
    return state


def _inventory_seed(now: datetime) -> dict:
    return {
        "items": [
            {"id": "item-fin-001", "sku": "FG-ROUTER-1U", "name": "Edge Router 1U", "uom": "ea", "type": "finished", "unitCost": 3200},
            {"id": "item-sub-001", "sku": "ASM-FPGA", "name": "FPGA Processing Module", "uom": "ea", "type": "subassembly", "unitCost": 580},
            {"id": "item-raw-001", "sku": "PCB-10", "name": "PCB Board 10-layer", "uom": "ea", "type": "raw", "unitCost": 85},
            {"id": "item-raw-002", "sku": "CAP-470", "name": "470uF Capacitor", "uom": "ea", "type": "raw", "unitCost": 1.75},
        ],
        "boms": [
            {
                "id": "bom-asm-fpga",
                "itemId": "item-sub-001",
                "components": [
                    {"itemId": "item-raw-001", "qty": 1},
                    {"itemId": "item-raw-002", "qty": 20},
                ],
            },
            {
                "id": "bom-router",
                "itemId": "item-fin-001",
                "components": [
                    {"itemId": "item-sub-001", "qty": 1},
                    {"itemId": "item-raw-002", "qty": 4},
                ],
            },
        ],
        "warehouses": [
            {"id": "wh-main", "name": "Main Plant"},
            {"id": "wh-eu", "name": "EU Fulfillment"},
        ],
        "locations": [
            {"id": "loc-main-raw", "warehouseId": "wh-main", "path": "RAW/ZoneA/Bin12"},
            {"id": "loc-main-wip", "warehouseId": "wh-main", "path": "WIP/Line1/Cell3"},
            {"id": "loc-main-fg", "warehouseId": "wh-main", "path": "FG/Rack2/Shelf1"},
            {"id": "loc-eu-fg", "warehouseId": "wh-eu", "path": "FG/RowB/Bay4"},
        ],
        "stockLots": [
            {"id": "lot-raw-001", "itemId": "item-raw-001", "lotNo": "PCB-2403A", "qty": 120, "locationId": "loc-main-raw", "status": "available"},
            {"id": "lot-raw-002", "itemId": "item-raw-002", "lotNo": "CAP-2403", "qty": 2500, "locationId": "loc-main-raw", "status": "available"},
            {"id": "lot-sub-001", "itemId": "item-sub-001", "lotNo": "FPGA-2402", "qty": 40, "locationId": "loc-main-wip", "status": "reserved"},
            {"id": "lot-fin-001", "itemId": "item-fin-001", "lotNo": "FG-2402", "qty": 18, "locationId": "loc-main-fg", "status": "available"},
        ],
        "stockMoves": [
            {
                "id": "sm-001",
                "itemId": "item-raw-001",
                "qty": 10,
                "fromLocationId": "loc-main-raw",
                "toLocationId": "loc-main-wip",
                "refType": "WorkOrder",
                "refId": "wo-router-10-1",
                "ts": now - _HOUR,
                "note": "Issue PCB to line",
            },
            {
                "id": "sm-002",
                "itemId": "item-fin-001",
                "qty": 5,
                "fromLocationId": "loc-main-wip",
                "toLocationId": "loc-main-fg",
                "refType": "ProductionOrder",
                "refId": "po-router-10",
                "ts": now - timedelta(minutes=30),
            },
        ],
    }


def _mes_seed(now: datetime) -> dict:
    return {
        "routings": [
            {
                "id": "routing-router",
                "itemId": "item-fin-001",
                "operations": [
                    {"opId": "ROUTER-ASM", "seq": 10, "wcId": "wc-assembly", "stdTimeMin": 45},
                    {"opId": "ROUTER-TEST", "seq": 20, "wcId": "wc-test", "stdTimeMin": 35},
                    {"opId": "ROUTER-PACK", "seq": 30, "wcId": "wc-pack", "stdTimeMin": 12},
                ],
            },
        ],
        "workCenters": [
            {"id": "wc-assembly", "name": "Assembly Line 1", "capabilityTags": ["smt", "fpga"]},
            {"id": "wc-test", "name": "Functional Test Cell", "capabilityTags": ["boundary-scan"]},
            {"id": "wc-pack", "name": "Packing Cell", "capabilityTags": ["labeling", "packout"]},
        ],
        "productionOrders": [
            {
                "id": "po-router-10",
                "itemId": "item-fin-001",
                "qty": 25,
                "dueDate": now + 5 * _DAY,
                "status": "in-progress",
                "releasedAt": now - 12 * _HOUR,
            },
            {
                "id": "po-router-11",
                "itemId": "item-fin-001",
                "qty": 15,
                "dueDate": now + 10 * _DAY,
                "status": "released",
                "releasedAt": now - 3 * _HOUR,
            },
        ],
        "workOrders": [
            {
                "id": "wo-router-10-1",
                "prodOrderId": "po-router-10",
                "opId": "ROUTER-ASM",
                "wcId": "wc-assembly",
                "assignee": "alexei",
                "status": "in-progress",
                "startedAt": now - timedelta(minutes=40),
            },
            {
                "id": "wo-router-10-2",
                "prodOrderId": "po-router-10",
                "opId": "ROUTER-TEST",
                "wcId": "wc-test",
                "assignee": "mila",
                "status": "planned",
            },
            {
                "id": "wo-router-11-1",
                "prodOrderId": "po-router-11",
                "opId": "ROUTER-ASM",
                "wcId": "wc-assembly",
                "status": "planned",
            },
        ],
        "qualityChecks": [
            {
                "id": "qc-wo-router-10-1",
                "entityType": "WorkOrder",
                "entityId": "wo-router-10-1",
                "ruleId": "qc-solder-visual",
                "status": "pending",
                "evidence": [],
            },
        ],
        "nonconformances": [
            {
                "id": "nc-router-01",
                "refType": "WorkOrder",
                "refId": "wo-router-10-1",
                "severity": "medium",
                "status": "investigating",
                "action": "Rework solder joint on board 4",
            },
        ],
        "maintenanceOrders": [
            {
                "id": "mo-line1-01",
                "assetId": "wc-assembly",
                "type": "preventive",
                "status": "scheduled",
                "schedule": now + 2 * _DAY,
                "logs": [
                    {
                        "id": "mo-line1-01-log1",
                        "ts": now - _DAY,
                        "note": "Lubricated conveyor chain",
                        "actor": "maintenance-bot",
                    },
                ],
            },
        ],
    }


def _erp_seed(now: datetime) -> dict:
    return {
        "suppliers": [
            {"id": "sup-adv-components", "name": "Advanced Components Ltd", "contactEmail": "orders@advc.com"},
            {"id": "sup-global-pcb", "name": "Global PCB Works", "contactEmail": "sales@globalpcb.io"},
        ],
        "customers": [
            {"id": "cust-citynet", "name": "CityNet ISP", "contactEmail": "ops@citynet.example"},
            {"id": "cust-fastfiber", "name": "FastFiber Telecom", "contactEmail": "noc@fastfiber.example"},
        ],
        "purchaseOrders": [
            {
                "id": "po-2024-1045",
                "supplierId": "sup-adv-components",
                "status": "approved",
                "expectedDate": now + 4 * _DAY,
                "lines": [
                    {"itemId": "item-raw-001", "qty": 200, "price": 95},
                    {"itemId": "item-raw-002", "qty": 4000, "price": 1.6},
                ],
            },
            {
                "id": "po-2024-1046",
                "supplierId": "sup-global-pcb",
                "status": "received",
                "expectedDate": now - _DAY,
                "lines": [{"itemId": "item-raw-001", "qty": 150, "price": 83}],
            },
        ],
        "salesOrders": [
            {
                "id": "so-2024-201",
                "customerId": "cust-citynet",
                "status": "approved",
                "promisedDate": now + 7 * _DAY,
                "lines": [{"itemId": "item-fin-001", "qty": 30, "price": 5400}],
            },
            {
                "id": "so-2024-202",
                "customerId": "cust-fastfiber",
                "status": "draft",
                "lines": [{"itemId": "item-fin-001", "qty": 10, "price": 5500}],
            },
        ],
        "invoices": [
            {
                "id": "inv-2024-501",
                "partnerType": "customer",
                "partnerId": "cust-citynet",
                "lines": [
                    {"description": "Edge Router 1U", "qty": 10, "price": 5400},
                    {"description": "Deployment services", "qty": 1, "price": 3500},
                ],
                "total": 3500 + 10 * 5400,
                "status": "open",
                "issuedAt": now - 72 * _HOUR,
            },
        ],
    }


def _tasks_seed(now: datetime) -> dict:
    return {
        "tasks": [
            {
                "id": "task-001",
                "title": "Validate PO-2024-1045 delivery",
                "description": "Confirm quantities and trigger quality intake for incoming components.",
                "status": "in-progress",
                "priority": "high",
                "assignee": "olga",
                "tags": ["erp", "receiving"],
                "dueDate": now + _DAY,
                "sprintId": "sprint-current",
                "productionOrderId": "po-router-10",
            },
            {
                "id": "task-002",
                "title": "Schedule maintenance window",
                "description": "Coordinate downtime for Assembly Line 1 preventive maintenance.",
                "status": "todo",
                "priority": "medium",
                "tags": ["maintenance"],
                "dueDate": now + 2 * _DAY,
                "sprintId": "sprint-current",
            },
            {
                "id": "task-003",
                "title": "Prepare executive KPI brief",
                "description": "Summarise production throughput vs. demand for leadership report.",
                "status": "review",
                "priority": "high",
                "assignee": "irina",
                "tags": ["reporting"],
                "sprintId": "sprint-next",
            },
        ],
        "sprints": [
            {"id": "sprint-current", "name": "Sprint 12", "start": now - 3 * _DAY, "end": now + 11 * _DAY},
            {"id": "sprint-next", "name": "Sprint 13", "start": now + 12 * _DAY, "end": now + 26 * _DAY},
        ],
        "columns": [
            {"id": "col-backlog", "title": "Backlog", "status": "backlog", "wipLimit": 30},
            {"id": "col-todo", "title": "Todo", "status": "todo", "wipLimit": 10},
            {"id": "col-progress", "title": "In progress", "status": "in-progress", "wipLimit": 8},
            {"id": "col-review", "title": "Review", "status": "review", "wipLimit": 5},
            {"id": "col-done", "title": "Done", "status": "done"},
        ],
        "timesheets": [
            {
                "id": "ts-001",
                "userId": "alexei",
                "entityType": "WorkOrder",
                "entityId": "wo-router-10-1",
                "hours": 2.5,
                "ts": now - 6 * _HOUR,
            },
            {
                "id": "ts-002",
                "userId": "olga",
                "entityType": "Task",
                "entityId": "task-001",
                "hours": 1.5,
                "ts": now - 3 * _HOUR,
            },
        ],
    }


_ROUTER_TEMPLATE_FIELDS = [
    {"id": "tpl-router-role", "key": "role", "label": "Device role", "type": "text", "required": True, "defaultValue": "Edge router"},
    {"id": "tpl-router-install-date", "key": "installDate", "label": "Commissioning date", "type": "date", "required": True},
    {"id": "tpl-router-serial", "key": "serialNumber", "label": "Serial number", "type": "text", "required": True},
    {
        "id": "tpl-router-power",
        "key": "powerProfile",
        "label": "Power profile",
        "type": "select",
        "required": True,
        "options": [
            {"label": "AC (dual supply)", "value": "ac_dual"},
            {"label": "DC", "value": "dc"},
        ],
    },
    {"id": "tpl-router-notes", "key": "notes", "label": "Notes", "type": "multiline"},
]

_SERVER_TEMPLATE_FIELDS = [
    {"id": "tpl-server-os", "key": "osVersion", "label": "Operating system", "type": "text", "required": True, "defaultValue": "ESXi 8.0"},
    {"id": "tpl-server-ram", "key": "ramGb", "label": "Memory (GB)", "type": "number", "required": True, "defaultValue": 256},
    {"id": "tpl-server-owner", "key": "owner", "label": "Responsible team", "type": "text"},
]


def _passports_seed(now: datetime) -> dict:
    return {
        "deviceModels": [
            {"id": "model-edge-router-1u", "vendor": "NetGrip Manufacturing", "name": "Edge Router 1U", "description": "1U edge router for regional PoPs."},
            {"id": "model-dell-r650", "vendor": "Dell", "name": "Dell PowerEdge R650", "description": "Dense virtualization server."},
        ],
        "devices": [
            {
                "id": "device-ast-1005",
                "assetTag": "AST-1005",
                "deviceModelId": "model-edge-router-1u",
                "serialNumber": "ER1U-24-1005",
                "ipAddress": "10.0.10.55",
                "location": "DC-West / Rack 14U",
                "owner": "core-network-team",
                "status": "in_service",
            },
            {
                "id": "device-ast-1042",
                "assetTag": "AST-1042",
                "deviceModelId": "model-dell-r650",
                "serialNumber": "R650-2404-1042",
                "ipAddress": "10.20.2.15",
                "location": "DC-East / Contractor zone 3",
                "owner": "virtualization-team",
                "status": "maintenance",
            },
        ],
        "templates": [
            {
                "id": "tpl-router-base-v1",
                "deviceModelId": "model-edge-router-1u",
                "name": "Edge Router 1U passport",
                "description": "Recommended field set for edge routers.",
                "version": 1,
                "isActive": True,
                "status": "published",
                "createdAt": now - 150 * _DAY,
                "fields": _ROUTER_TEMPLATE_FIELDS,
            },
            {
                "id": "tpl-server-base-v1",
                "deviceModelId": "model-dell-r650",
                "name": "R650 standard",
                "description": "Baseline data for virtualization servers.",
                "version": 1,
                "isActive": True,
                "status": "published",
                "createdAt": now - 45 * _DAY,
                "fields": _SERVER_TEMPLATE_FIELDS,
            },
        ],
        "deviceHistory": {
            "device-ast-1005": [
                {
                    "id": "hist-ast-1005-2",
                    "deviceId": "device-ast-1005",
                    "ts": now - 120 * _DAY,
                    "action": "Commissioned",
                    "details": "Installed in West-DC row C, uplink to DC-CORE-01.",
                    "actor": "core-network-team",
                },
                {
                    "id": "hist-ast-1005-1",
                    "deviceId": "device-ast-1005",
                    "ts": now - 140 * _DAY,
                    "action": "Received",
                    "details": "Received into stock from production order po-router-09.",
                    "actor": "warehouse",
                },
            ],
        },
        "passports": [
            {
                "id": "pp-router-0001",
                "deviceId": "device-ast-1005",
                "templateId": "tpl-router-base-v1",
                "status": "ready",
                "version": 1,
                "createdAt": now - 125 * _DAY,
                "updatedAt": now - 30 * _DAY,
                "assetTag": "AST-1005",
                "model": "Edge Router 1U",
                "serialNumber": "ER1U-24-1005",
                "vendor": "NetGrip Manufacturing",
                "location": "DC-West / Rack 14U",
                "owner": "core-network-team",
                "firmware": "v5.2.1",
                "macs": ["00:1C:42:2B:60:5A", "00:1C:42:2B:60:5B"],
                "ips": ["10.0.10.55", "10.0.10.56"],
                "warrantyUntil": now + 365 * _DAY,
                "certificates": ["CE", "FCC", "ISO27001"],
                "customFields": {"rackUnit": "14", "site": "West-DC"},
                "fieldValues": {
                    "role": "Edge router",
                    "installDate": (now - 120 * _DAY).date().isoformat(),
                    "serialNumber": "ER1U-24-1005",
                    "powerProfile": "ac_dual",
                },
                "history": [
                    {
                        "ts": now - 120 * _DAY,
                        "action": "install",
                        "details": "Installed in West-DC row C",
                        "actor": "maintenance-bot",
                    },
                    {
                        "ts": now - 30 * _DAY,
                        "action": "updateFirmware",
                        "details": "Upgraded to v5.2.1 for zero-touch provisioning",
                        "actor": "automation-playbook",
                    },
                ],
                "attachments": [
                    {
                        "id": "pp-router-0001-datasheet",
                        "name": "Router datasheet.pdf",
                        "url": "/static/demo/router-datasheet.pdf",
                        "uploadedAt": now - 120 * _DAY,
                    },
                ],
            },
        ],
    }


def _automation_seed(now: datetime) -> dict:
    return {
        "templates": [
            {
                "id": "playbook-receiving",
                "name": "PO Receiving & Quality Intake",
                "category": "inventory",
                "description": "Automate receiving workflow including barcode print and quality sampling.",
                "tags": ["erp", "warehouse"],
                "steps": [
                    {"id": "step-verify-po", "type": "script", "name": "Verify PO status", "command": "scripts/erp/verify_po.ts"},
                    {
                        "id": "step-create-stock-move",
                        "type": "script",
                        "name": "Create stock move",
                        "command": "scripts/inventory/create_move.ts",
                        "args": {"location": "loc-main-raw"},
                    },
                    {
                        "id": "step-print-label",
                        "type": "script",
                        "name": "Print barcode labels",
                        "command": "scripts/label/print.ts",
                        "isDryRunSupported": True,
                    },
                ],
            },
            {
                "id": "playbook-release-order",
                "name": "Release Production Order",
                "category": "maintenance",
                "description": "Generate work orders, issue materials, and notify planners.",
                "tags": ["mes"],
                "steps": [
                    {"id": "step-gen-wo", "type": "script", "name": "Generate work orders", "command": "scripts/mes/generate_wo.ts"},
                    {"id": "step-notify", "type": "script", "name": "Notify planner", "command": "scripts/notify/slack.ts"},
                ],
            },
        ],
        "runs": [
            {
                "id": "run-2024-5001",
                "playbookId": "playbook-receiving",
                "startedAt": now - timedelta(minutes=15),
                "finishedAt": now - timedelta(minutes=12),
                "status": "completed",
                "runBy": "automation-bot",
                "dryRun": False,
                "output": "PO verified. Stock move created. Labels queued.",
                "artifacts": [
                    {
                        "id": "run-2024-5001-log",
                        "name": "Execution log",
                        "type": "log",
                        "url": "/static/demo/logs/run-2024-5001.log",
                    },
                ],
            },
        ],
    }


def _workforce_seed(now: datetime) -> dict:
    week_start = now - timedelta(days=now.weekday())
    return {
        "teams": [
            {
                "id": "team-assembly",
                "name": "Assembly Crew A",
                "scope": "production",
                "accessScopes": ["mes:work-orders", "inventory:issue"],
                "headcount": 6,
                "location": "Main Plant",
                "shiftModel": "2x8",
            },
            {
                "id": "team-quality",
                "name": "Quality Lab",
                "scope": "quality",
                "accessScopes": ["mes:quality"],
                "headcount": 3,
                "location": "Main Plant",
                "shiftModel": "1x8",
            },
        ],
        "members": [
            {
                "id": "alexei",
                "name": "Alexei Petrov",
                "teamId": "team-assembly",
                "title": "Senior assembler",
                "skills": ["smt", "fpga"],
                "shift": "day",
                "productivityScore": 92,
                "utilization": 0.86,
                "currentLoadHours": 34,
                "badges": ["mentor"],
            },
            {
                "id": "mila",
                "name": "Mila Sokolova",
                "teamId": "team-quality",
                "title": "Test engineer",
                "skills": ["boundary-scan"],
                "shift": "day",
                "productivityScore": 88,
                "utilization": 0.74,
                "currentLoadHours": 28,
                "badges": [],
            },
        ],
        "assignments": [
            {
                "id": "asg-001",
                "memberId": "alexei",
                "entityType": "WorkOrder",
                "entityId": "wo-router-10-1",
                "status": "active",
                "effortHours": 6,
                "startedAt": now - timedelta(minutes=40),
                "dueAt": now + _DAY,
            },
            {
                "id": "asg-002",
                "memberId": "mila",
                "entityType": "WorkOrder",
                "entityId": "wo-router-10-2",
                "status": "planned",
                "effortHours": 4,
                "dueAt": now + 2 * _DAY,
            },
        ],
        "utilization": [
            {"id": "util-assembly-w1", "teamId": "team-assembly", "weekStart": week_start, "actual": 0.86, "target": 0.85, "overtimeHours": 6},
            {"id": "util-quality-w1", "teamId": "team-quality", "weekStart": week_start, "actual": 0.74, "target": 0.8, "overtimeHours": 0},
        ],
        "performance": [
            {"memberId": "alexei", "completedThisWeek": 14, "avgCycleTimeMin": 42, "firstPassYield": 0.97, "labourEfficiency": 1.04},
            {"memberId": "mila", "completedThisWeek": 22, "avgCycleTimeMin": 31, "firstPassYield": 0.99, "labourEfficiency": 0.96},
        ],
        "reports": [
            {
                "id": "wf-report-weekly",
                "label": "Weekly labour summary",
                "generatedAt": now - _DAY,
                "ownerTeam": "team-assembly",
                "highlights": ["Overtime concentrated on Assembly Line 1", "Test cell below utilisation target"],
            },
        ],
    }
