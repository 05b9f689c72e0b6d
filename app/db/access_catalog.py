"""
Authoritative permission / role catalog applied by init_db.seed_access_control

Tuples are (name, resource, action, description, sort_order). Names present
here are upserted on every seed run; names removed from this list are NOT
deleted from the database.
"""

RESOURCES = [
    # (name, slug, icon, description, sort_order)
    ("Staff Management", "staff", "Users", "Manage employee records and profiles", 1),
    ("Attendance", "attendance", "Clock", "Track work hours and attendance", 2),
    ("Leave Management", "time_off", "Calendar", "Manage leave requests and balances", 3),
    ("Payroll", "payroll", "DollarSign", "Process payroll and compensation", 4),
    ("Recruitment", "recruitment", "UserPlus", "Manage job postings and candidates", 5),
    ("Reports", "reports", "BarChart", "View and export reports", 6),
    ("Settings", "settings", "Settings", "Configure system settings", 7),
    ("Role Management", "roles", "Shield", "Manage roles and permissions", 8),
    ("Organizations", "organizations", "Building", "Manage organizations", 9),
    ("Companies", "companies", "Briefcase", "Manage companies", 10),
]


def _crud(resource, noun, first_order=1, actions=("view", "create", "edit", "delete")):
    rows = []
    for offset, action in enumerate(actions):
        rows.append((
            f"{action}_{resource}",
            resource,
            action,
            f"{action.capitalize()} {noun}",
            first_order + offset,
        ))
    return rows


def _scoped(resource, subject, noun, first_order):
    """Permissions for a sub-entity of a resource, e.g. view_locations under settings"""
    rows = []
    for offset, verb in enumerate(("view", "create", "edit", "delete")):
        rows.append((
            f"{verb}_{subject}",
            resource,
            f"{verb}_{subject}",
            f"{verb.capitalize()} {noun}",
            first_order + offset,
        ))
    return rows


PERMISSIONS = (
    _crud("staff", "staff members")
    + [("export_staff", "staff", "export", "Export staff data", 5)]
    + _scoped("staff", "recognition", "recognition records", 6)
    + _scoped("staff", "role_upgrades", "role upgrades", 10)
    + _scoped("staff", "transfers", "location transfers", 14)
    + _scoped("staff", "discipline", "discipline notes", 18)
    + _scoped("staff", "offboarding", "offboarding records", 22)
    + _crud("attendance", "attendance records")
    + [("bulk_attendance", "attendance", "bulk", "Bulk attendance operations", 5)]
    + _crud("time_off", "leave requests")
    + [("approve_time_off", "time_off", "approve", "Approve/reject leave requests", 5)]
    + [
        ("view_payslips", "payroll", "view", "View payslips", 1),
        ("generate_payslips", "payroll", "generate", "Generate payslips", 2),
        ("send_payslips", "payroll", "send", "Send payslips to employees", 3),
    ]
    + _scoped("payroll", "compensation", "compensation records", 4)
    + _crud("recruitment", "job postings")
    + [("manage_candidates", "recruitment", "manage_candidates", "Manage candidates and applications", 5)]
    + [
        ("view_reports", "reports", "view", "View reports", 1),
        ("export_reports", "reports", "export", "Export reports", 2),
        ("view_hr_dashboard", "reports", "view_hr_dashboard", "View HR dashboard", 3),
        ("view_admin_dashboard", "reports", "view_admin_dashboard", "View admin dashboard", 4),
    ]
    + [
        ("view_settings", "settings", "view", "View settings", 1),
        ("edit_settings", "settings", "edit", "Edit settings", 2),
    ]
    + _scoped("settings", "locations", "office locations", 3)
    + _scoped("settings", "divisions", "divisions", 7)
    + _scoped("settings", "job_titles", "job titles", 11)
    + _scoped("settings", "announcements", "announcements", 15)
    + _crud("roles", "roles")
    + [
        ("assign_roles", "roles", "assign", "Assign roles to users", 5),
        ("view_users", "roles", "view_users", "View users", 6),
        ("edit_users", "roles", "edit_users", "Edit users", 7),
    ]
    + _crud("organizations", "organizations")
    + _crud("companies", "companies")
)


SYSTEM_ROLES = [
    # (name, hierarchy_level, icon, description)
    ("admin", 1, "ShieldCheck",
     "Full system access - can manage all data across all organizations and companies"),
    ("org", 2, "Building",
     "Organization-wide access - manages all companies under their organization"),
    ("company", 3, "Briefcase", "Company-level access - manages a single company"),
    ("hr", 4, "Users", "HR operations - manages staff, attendance, leave, and payroll"),
    ("user", 5, "User", "Self-service only - can view own records and apply for leave"),
]

# Canonical roles that receive every catalog permission
ALL_PERMISSIONS_ROLES = {"admin"}

_STAFF_SUBMODULES = [
    "view_recognition", "create_recognition", "edit_recognition",
    "view_role_upgrades", "create_role_upgrades",
    "view_transfers", "create_transfers",
    "view_discipline", "create_discipline",
    "view_offboarding", "create_offboarding",
]

ROLE_PERMISSIONS = {
    "org": [
        "view_staff", "create_staff", "edit_staff", "delete_staff", "export_staff",
        "view_attendance", "create_attendance", "edit_attendance", "bulk_attendance",
        "view_time_off", "create_time_off", "edit_time_off", "approve_time_off",
        "view_payslips", "generate_payslips", "send_payslips",
        "view_compensation", "create_compensation", "edit_compensation",
        "view_recruitment", "create_recruitment", "edit_recruitment", "manage_candidates",
        "view_reports", "export_reports", "view_hr_dashboard", "view_admin_dashboard",
        "view_settings", "edit_settings",
        "view_locations", "create_locations", "edit_locations",
        "view_divisions", "create_divisions", "edit_divisions",
        "view_job_titles", "create_job_titles", "edit_job_titles",
        "view_companies", "create_companies", "edit_companies",
        "view_roles", "assign_roles", "view_users", "edit_users",
        *_STAFF_SUBMODULES,
        "view_announcements", "create_announcements", "edit_announcements",
    ],
    "company": [
        "view_staff", "create_staff", "edit_staff", "export_staff",
        "view_attendance", "create_attendance", "edit_attendance", "bulk_attendance",
        "view_time_off", "create_time_off", "edit_time_off", "approve_time_off",
        "view_payslips", "generate_payslips", "send_payslips",
        "view_compensation", "create_compensation", "edit_compensation",
        "view_recruitment", "create_recruitment", "edit_recruitment", "manage_candidates",
        "view_reports", "export_reports", "view_hr_dashboard",
        "view_settings",
        "view_locations", "view_divisions", "view_job_titles",
        *_STAFF_SUBMODULES,
        "view_announcements", "create_announcements",
    ],
    "hr": [
        "view_staff", "create_staff", "edit_staff",
        "view_attendance", "create_attendance", "edit_attendance", "bulk_attendance",
        "view_time_off", "create_time_off", "edit_time_off", "approve_time_off",
        "view_payslips", "generate_payslips", "send_payslips",
        "view_compensation", "create_compensation", "edit_compensation",
        "view_recruitment", "create_recruitment", "edit_recruitment", "manage_candidates",
        "view_reports", "view_hr_dashboard",
        "view_settings",
        "view_locations", "create_locations", "edit_locations",
        "view_divisions", "create_divisions", "edit_divisions",
        "view_job_titles", "create_job_titles", "edit_job_titles",
        *_STAFF_SUBMODULES,
        "view_announcements", "create_announcements", "edit_announcements",
    ],
    "user": [
        "view_time_off", "create_time_off",
        "view_attendance",
        "view_payslips",
        "view_announcements",
    ],
}

# legacy name -> canonical name; permissions are copied at seed time only
LEGACY_ROLE_ALIASES = {
    "administrator": "admin",
    "organisation": "org",
    "manager": "company",
    "hr_officer": "hr",
    "staff": "user",
    "staff_member": "user",
}
