"""DDL das tabelas do cadastro CAPS no DuckDB.

Sem FOREIGN KEY: o DuckDB reescreve UPDATE como delete+insert e rejeita
atualizar linhas ainda referenciadas. Integridade referencial fica nos
resources (ver resources.py).
"""

# tabela -> CREATE TABLE
TABLES: dict[str, str] = {
    "patients": """
        CREATE TABLE IF NOT EXISTS patients (
            id VARCHAR PRIMARY KEY,
            name VARCHAR NOT NULL,
            birth_date DATE NOT NULL,
            sex VARCHAR NOT NULL,
            race_color VARCHAR NOT NULL,
            cns VARCHAR,
            cpf VARCHAR,
            prontuario VARCHAR,
            mother_name VARCHAR,
            responsible_name VARCHAR,
            address_street VARCHAR,
            address_number VARCHAR,
            address_complement VARCHAR,
            address_neighborhood VARCHAR,
            address_zipcode VARCHAR,
            phone VARCHAR,
            mobile VARCHAR,
            email VARCHAR,
            created_at TIMESTAMP,
            updated_at TIMESTAMP
        )
    """,
    "professionals": """
        CREATE TABLE IF NOT EXISTS professionals (
            id VARCHAR PRIMARY KEY,
            name VARCHAR NOT NULL,
            cbo_code VARCHAR NOT NULL,
            cbo_description VARCHAR NOT NULL,
            cns VARCHAR,
            cpf VARCHAR,
            active BOOLEAN DEFAULT TRUE,
            created_at TIMESTAMP,
            updated_at TIMESTAMP
        )
    """,
    "procedures": """
        CREATE TABLE IF NOT EXISTS procedures (
            id VARCHAR PRIMARY KEY,
            sigtap_code VARCHAR NOT NULL,
            description VARCHAR NOT NULL,
            procedure_type VARCHAR,
            active BOOLEAN DEFAULT TRUE,
            created_at TIMESTAMP,
            updated_at TIMESTAMP
        )
    """,
    "attendances": """
        CREATE TABLE IF NOT EXISTS attendances (
            id VARCHAR PRIMARY KEY,
            patient_id VARCHAR NOT NULL,
            admission_date DATE NOT NULL,
            month_reference VARCHAR NOT NULL,
            patient_origin VARCHAR NOT NULL,
            cid_primary VARCHAR NOT NULL,
            cid_secondary1 VARCHAR,
            cid_secondary2 VARCHAR,
            cid_secondary3 VARCHAR,
            esf_coverage VARCHAR NOT NULL,
            esf_cnes VARCHAR,
            homeless_situation VARCHAR NOT NULL,
            drug_user VARCHAR NOT NULL,
            drug_type VARCHAR,
            patient_destination VARCHAR NOT NULL,
            created_at TIMESTAMP,
            updated_at TIMESTAMP
        )
    """,
    "attendance_actions": """
        CREATE TABLE IF NOT EXISTS attendance_actions (
            id VARCHAR PRIMARY KEY,
            attendance_id VARCHAR NOT NULL,
            professional_id VARCHAR NOT NULL,
            procedure_id VARCHAR NOT NULL,
            action_date DATE NOT NULL,
            quantity INTEGER NOT NULL,
            notes VARCHAR,
            created_at TIMESTAMP,
            updated_at TIMESTAMP
        )
    """,
}
