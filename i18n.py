"""
i18n.py
Arabic / French UI labels. Records never store translated text: enum values are
kept as keys (e.g. "in-training") and translated here at render time.
"""

from __future__ import annotations

LANGUAGES = ["ar", "fr"]
LANGUAGE_NAMES = {"ar": "العربية", "fr": "Français"}

TRANSLATIONS: dict[str, dict[str, str]] = {
    "ar": {
        # Shell
        "app_title": "مدرسة السياقة",
        "general_manager": "المدير العام",
        "admin": "مسؤول",
        "navigate": "التنقل",
        "logout": "تسجيل الخروج",
        "dashboard": "لوحة التحكم",
        "students": "الطلاب",
        "instructors": "المدربون",
        "vehicles": "المركبات",
        "schedule": "جدول الحصص",
        "finance": "المالية",
        "settings": "الإعدادات",
        "manage_students": "إدارة الطلاب",
        "manage_instructors": "إدارة المدربين",
        "manage_vehicles": "إدارة المركبات",
        "finance_management": "الإدارة المالية",
        # Login
        "login_title": "تسجيل دخول المسؤول",
        "username": "اسم المستخدم",
        "password": "كلمة المرور",
        "login": "دخول",
        "invalid_credentials": "اسم المستخدم أو كلمة المرور غير صحيحة.",
        "login_hint": "الحساب الافتراضي:\n\n- اسم المستخدم: **admin**\n- كلمة المرور: **admin123**\n\nالبيانات محفوظة في الجلسة الحالية فقط وتضيع عند إعادة التحميل.",
        # Common
        "actions": "الإجراءات",
        "edit": "تعديل",
        "delete": "حذف",
        "print": "طباعة",
        "save": "حفظ",
        "cancel_edit": "إلغاء التعديل",
        "confirm_delete": "تأكيد الحذف",
        "none_selected": "(لا شيء)",
        "status": "الحالة",
        "date": "التاريخ",
        "time": "الوقت",
        "amount": "المبلغ",
        "description": "الوصف",
        "category": "الفئة",
        "currency": "درهم",
        "unknown": "غير معروف",
        "no_data": "لا توجد بيانات.",
        "download": "تحميل",
        "close": "إغلاق",
        "print_preview": "معاينة الطباعة",
        "full_name": "الاسم الكامل",
        "phone_number": "رقم الهاتف",
        "address": "العنوان",
        "national_id": "رقم البطاقة الوطنية",
        # Dashboard
        "total_students": "إجمالي الطلاب",
        "active_instructors": "المدربون النشطون",
        "available_vehicles": "المركبات المتوفرة",
        "monthly_income": "دخل الشهر",
        "monthly_income_chart": "الدخل الشهري",
        "success_rate": "نسبة النجاح",
        # Students
        "search_by_name_or_id": "البحث بالاسم أو رقم البطاقة",
        "select_student": "اختر طالبا",
        "license_type": "نوع الرخصة",
        "balance": "المتبقي",
        "students_with_balance": "طلاب لديهم مبالغ متبقية",
        "add_student_title": "إضافة طالب جديد",
        "edit_student_title": "تعديل بيانات الطالب",
        "total_training_cost": "التكلفة الإجمالية للتكوين ({currency})",
        "student_added": "تمت إضافة الطالب.",
        "student_updated": "تم تحديث بيانات الطالب.",
        "student_deleted": "تم حذف الطالب.",
        "student_status_open": "ملف مفتوح",
        "student_status_in-training": "في التكوين",
        "student_status_passed-exam": "اجتاز الامتحان",
        "student_status_successful": "ناجح",
        "student_status_failed": "راسب",
        "document_management": "إدارة الوثائق",
        "document_name": "اسم الوثيقة",
        "doc_name_placeholder": "مثال: البطاقة الوطنية",
        "select_file": "اختر ملفا",
        "add_document": "إضافة وثيقة",
        "no_documents_attached": "لا توجد وثائق مرفقة.",
        "file_name": "اسم الملف",
        "upload_date": "تاريخ الرفع",
        "alert_doc_name_file": "يرجى إدخال اسم الوثيقة واختيار ملف.",
        # Student file (print)
        "student_file": "ملف الطالب",
        "personal_information": "المعلومات الشخصية",
        "training_information": "معلومات التكوين",
        "registration_date": "تاريخ التسجيل",
        "financial_status": "الوضعية المالية",
        "total_cost": "التكلفة الإجمالية",
        "amount_paid": "المبلغ المدفوع",
        "remaining_balance": "المبلغ المتبقي",
        "attached_documents": "الوثائق المرفقة",
        # Instructors
        "instructors_list": "لائحة المدربين",
        "select_instructor": "اختر مدربا",
        "instructor": "المدرب",
        "hire_date": "تاريخ التوظيف",
        "assigned_vehicle": "المركبة المخصصة",
        "assigned_vehicle_id": "رقم المركبة المخصصة",
        "vehicle_id_placeholder": "اتركه فارغا إن لم تكن هناك مركبة",
        "vehicle_no": "مركبة رقم",
        "unassigned": "غير مخصصة",
        "add_instructor_title": "إضافة مدرب جديد",
        "edit_instructor_title": "تعديل بيانات المدرب",
        "instructor_added": "تمت إضافة المدرب.",
        "instructor_updated": "تم تحديث بيانات المدرب.",
        "instructor_deleted": "تم حذف المدرب.",
        # Vehicles
        "vehicles_list": "لائحة المركبات",
        "select_vehicle": "اختر مركبة",
        "vehicle": "المركبة",
        "vehicle_type": "النوع",
        "brand": "العلامة",
        "registration": "رقم التسجيل",
        "purchase_year": "سنة الشراء",
        "last_maintenance": "آخر صيانة",
        "vehicle_status_available": "متوفرة",
        "vehicle_status_maintenance": "صيانة",
        "vehicle_status_out-of-service": "خارج الخدمة",
        "add_vehicle_title": "إضافة مركبة جديدة",
        "edit_vehicle_title": "تعديل بيانات المركبة",
        "vehicle_added": "تمت إضافة المركبة.",
        "vehicle_updated": "تم تحديث بيانات المركبة.",
        "vehicle_deleted": "تم حذف المركبة.",
        # Schedule
        "weekly_schedule": "الجدول الأسبوعي",
        "add_new_lesson": "إضافة حصة جديدة",
        "add_lesson_title": "إضافة حصة",
        "edit_lesson_title": "تعديل الحصة",
        "delete_lesson": "حذف الحصة",
        "lesson_type": "نوع الحصة",
        "lesson_type_practical": "تطبيقي",
        "lesson_type_theoretical": "نظري",
        "lesson_status_scheduled": "مجدولة",
        "lesson_status_completed": "مكتملة",
        "lesson_status_cancelled": "ملغاة",
        "lesson_topic": "موضوع الحصة",
        "classroom": "القاعة",
        "student": "الطالب",
        "lesson_added": "تمت إضافة الحصة.",
        "lesson_updated": "تم تحديث الحصة.",
        "lesson_deleted": "تم حذف الحصة.",
        "monday": "الاثنين",
        "tuesday": "الثلاثاء",
        "wednesday": "الأربعاء",
        "thursday": "الخميس",
        "friday": "الجمعة",
        "saturday": "السبت",
        "sunday": "الأحد",
        # Finance
        "total_income": "إجمالي الدخل",
        "total_expenses": "إجمالي المصاريف",
        "net_profit": "صافي الربح",
        "payments_income": "المدفوعات (الدخل)",
        "expenses": "المصاريف",
        "reports": "التقارير",
        "select_payment": "اختر دفعة",
        "select_expense": "اختر مصروفا",
        "deleted_student": "طالب محذوف",
        "add_payment_title": "إضافة دفعة",
        "edit_payment_title": "تعديل الدفعة",
        "add_expense_title": "إضافة مصروف",
        "edit_expense_title": "تعديل المصروف",
        "payment_recorded": "تم تسجيل الدفعة.",
        "payment_updated": "تم تحديث الدفعة.",
        "payment_deleted": "تم حذف الدفعة.",
        "expense_recorded": "تم تسجيل المصروف.",
        "expense_updated": "تم تحديث المصروف.",
        "expense_deleted": "تم حذف المصروف.",
        "expense_category_maintenance": "صيانة",
        "expense_category_salaries": "رواتب",
        "expense_category_rent": "كراء",
        "expense_category_bills": "فواتير",
        "expense_category_other": "أخرى",
        "revenue_by_month": "الدخل حسب الشهر",
        "download_payments_csv": "تحميل المدفوعات (CSV)",
        "download_expenses_csv": "تحميل المصاريف (CSV)",
        "download_schedule_csv": "تحميل الجدول الأسبوعي (CSV)",
        # Receipt
        "payment_receipt": "وصل أداء",
        "school_name": "اسم المدرسة",
        "print_date": "تاريخ الطباعة",
        "received_from": "توصلنا من السيد(ة)",
        "amount_of": "مبلغ",
        "for_reason": "وذلك مقابل",
        "on_date": "بتاريخ",
        "receipt_footer": "شكرا لثقتكم. هذا الوصل دليل على الأداء.",
        # Settings
        "school_data": "بيانات المدرسة",
        "school_address": "عنوان المدرسة",
        "save_changes": "حفظ التغييرات",
        "settings_saved": "تم حفظ الإعدادات.",
        "interface_customization": "تخصيص الواجهة",
        "language": "اللغة",
        "change_password": "تغيير كلمة المرور",
        "new_password": "كلمة المرور الجديدة",
        "confirm_new_password": "تأكيد كلمة المرور الجديدة",
        "update_password": "تحديث كلمة المرور",
        "password_updated": "تم تحديث كلمة المرور.",
        "backup_and_restore": "النسخ الاحتياطي",
        "backup_description": "تحميل نسخة من جميع بيانات الجلسة الحالية بصيغة JSON.",
        "create_backup_now": "إنشاء نسخة احتياطية الآن",
        # Validation
        "err_name_required": "الاسم مطلوب.",
        "err_phone_required": "رقم الهاتف مطلوب.",
        "err_national_id_required": "رقم البطاقة الوطنية مطلوب.",
        "err_cost_numeric": "يجب أن تكون التكلفة رقما.",
        "err_date_invalid": "تاريخ غير صالح.",
        "err_vehicle_id_integer": "رقم المركبة يجب أن يكون عددا صحيحا موجبا.",
        "err_type_required": "النوع مطلوب.",
        "err_brand_required": "العلامة مطلوبة.",
        "err_registration_required": "رقم التسجيل مطلوب.",
        "err_year_integer": "سنة الشراء يجب أن تكون عددا صحيحا.",
        "err_lesson_type": "نوع الحصة غير صالح.",
        "err_time_slot": "الوقت يجب أن يكون من 08:00 إلى 18:00.",
        "err_student_required": "يرجى اختيار طالب.",
        "err_instructor_required": "يرجى اختيار مدرب.",
        "err_vehicle_required": "يرجى اختيار مركبة.",
        "err_topic_required": "موضوع الحصة مطلوب.",
        "err_location_required": "القاعة مطلوبة.",
        "err_amount_numeric": "يجب أن يكون المبلغ رقما.",
        "err_description_required": "الوصف مطلوب.",
        "err_password_short": "يجب أن تتكون كلمة المرور من 6 أحرف على الأقل.",
        "err_password_mismatch": "كلمتا المرور غير متطابقتين.",
    },
    "fr": {
        # Shell
        "app_title": "Auto-école",
        "general_manager": "Directeur général",
        "admin": "Administrateur",
        "navigate": "Navigation",
        "logout": "Déconnexion",
        "dashboard": "Tableau de bord",
        "students": "Élèves",
        "instructors": "Moniteurs",
        "vehicles": "Véhicules",
        "schedule": "Planning",
        "finance": "Finances",
        "settings": "Paramètres",
        "manage_students": "Gestion des élèves",
        "manage_instructors": "Gestion des moniteurs",
        "manage_vehicles": "Gestion des véhicules",
        "finance_management": "Gestion financière",
        # Login
        "login_title": "Connexion administrateur",
        "username": "Nom d'utilisateur",
        "password": "Mot de passe",
        "login": "Se connecter",
        "invalid_credentials": "Nom d'utilisateur ou mot de passe incorrect.",
        "login_hint": "Compte par défaut :\n\n- utilisateur : **admin**\n- mot de passe : **admin123**\n\nLes données ne vivent que pendant la session et sont perdues au rechargement.",
        # Common
        "actions": "Actions",
        "edit": "Modifier",
        "delete": "Supprimer",
        "print": "Imprimer",
        "save": "Enregistrer",
        "cancel_edit": "Annuler la modification",
        "confirm_delete": "Confirmer la suppression",
        "none_selected": "(aucun)",
        "status": "Statut",
        "date": "Date",
        "time": "Heure",
        "amount": "Montant",
        "description": "Description",
        "category": "Catégorie",
        "currency": "MAD",
        "unknown": "Inconnu",
        "no_data": "Aucune donnée.",
        "download": "Télécharger",
        "close": "Fermer",
        "print_preview": "Aperçu avant impression",
        "full_name": "Nom complet",
        "phone_number": "Téléphone",
        "address": "Adresse",
        "national_id": "N° CIN",
        # Dashboard
        "total_students": "Total des élèves",
        "active_instructors": "Moniteurs actifs",
        "available_vehicles": "Véhicules disponibles",
        "monthly_income": "Revenu du mois",
        "monthly_income_chart": "Revenus mensuels",
        "success_rate": "Taux de réussite",
        # Students
        "search_by_name_or_id": "Rechercher par nom ou CIN",
        "select_student": "Choisir un élève",
        "license_type": "Type de permis",
        "balance": "Reste à payer",
        "students_with_balance": "Élèves avec un solde dû",
        "add_student_title": "Ajouter un élève",
        "edit_student_title": "Modifier l'élève",
        "total_training_cost": "Coût total de la formation ({currency})",
        "student_added": "Élève ajouté.",
        "student_updated": "Élève mis à jour.",
        "student_deleted": "Élève supprimé.",
        "student_status_open": "Dossier ouvert",
        "student_status_in-training": "En formation",
        "student_status_passed-exam": "Examen passé",
        "student_status_successful": "Réussi",
        "student_status_failed": "Échoué",
        "document_management": "Gestion des documents",
        "document_name": "Nom du document",
        "doc_name_placeholder": "Ex. : Carte d'identité",
        "select_file": "Choisir un fichier",
        "add_document": "Ajouter le document",
        "no_documents_attached": "Aucun document joint.",
        "file_name": "Nom du fichier",
        "upload_date": "Date d'ajout",
        "alert_doc_name_file": "Veuillez saisir le nom du document et choisir un fichier.",
        # Student file (print)
        "student_file": "Dossier de l'élève",
        "personal_information": "Informations personnelles",
        "training_information": "Informations de formation",
        "registration_date": "Date d'inscription",
        "financial_status": "Situation financière",
        "total_cost": "Coût total",
        "amount_paid": "Montant payé",
        "remaining_balance": "Reste à payer",
        "attached_documents": "Documents joints",
        # Instructors
        "instructors_list": "Liste des moniteurs",
        "select_instructor": "Choisir un moniteur",
        "instructor": "Moniteur",
        "hire_date": "Date d'embauche",
        "assigned_vehicle": "Véhicule attribué",
        "assigned_vehicle_id": "N° du véhicule attribué",
        "vehicle_id_placeholder": "Laisser vide si aucun véhicule",
        "vehicle_no": "Véhicule n°",
        "unassigned": "Non attribué",
        "add_instructor_title": "Ajouter un moniteur",
        "edit_instructor_title": "Modifier le moniteur",
        "instructor_added": "Moniteur ajouté.",
        "instructor_updated": "Moniteur mis à jour.",
        "instructor_deleted": "Moniteur supprimé.",
        # Vehicles
        "vehicles_list": "Liste des véhicules",
        "select_vehicle": "Choisir un véhicule",
        "vehicle": "Véhicule",
        "vehicle_type": "Type",
        "brand": "Marque",
        "registration": "Immatriculation",
        "purchase_year": "Année d'achat",
        "last_maintenance": "Dernier entretien",
        "vehicle_status_available": "Disponible",
        "vehicle_status_maintenance": "En maintenance",
        "vehicle_status_out-of-service": "Hors service",
        "add_vehicle_title": "Ajouter un véhicule",
        "edit_vehicle_title": "Modifier le véhicule",
        "vehicle_added": "Véhicule ajouté.",
        "vehicle_updated": "Véhicule mis à jour.",
        "vehicle_deleted": "Véhicule supprimé.",
        # Schedule
        "weekly_schedule": "Planning hebdomadaire",
        "add_new_lesson": "Nouvelle séance",
        "add_lesson_title": "Ajouter une séance",
        "edit_lesson_title": "Modifier la séance",
        "delete_lesson": "Supprimer la séance",
        "lesson_type": "Type de séance",
        "lesson_type_practical": "Pratique",
        "lesson_type_theoretical": "Théorique",
        "lesson_status_scheduled": "Planifiée",
        "lesson_status_completed": "Terminée",
        "lesson_status_cancelled": "Annulée",
        "lesson_topic": "Sujet de la séance",
        "classroom": "Salle",
        "student": "Élève",
        "lesson_added": "Séance ajoutée.",
        "lesson_updated": "Séance mise à jour.",
        "lesson_deleted": "Séance supprimée.",
        "monday": "Lundi",
        "tuesday": "Mardi",
        "wednesday": "Mercredi",
        "thursday": "Jeudi",
        "friday": "Vendredi",
        "saturday": "Samedi",
        "sunday": "Dimanche",
        # Finance
        "total_income": "Revenus totaux",
        "total_expenses": "Dépenses totales",
        "net_profit": "Bénéfice net",
        "payments_income": "Paiements (revenus)",
        "expenses": "Dépenses",
        "reports": "Rapports",
        "select_payment": "Choisir un paiement",
        "select_expense": "Choisir une dépense",
        "deleted_student": "Élève supprimé",
        "add_payment_title": "Ajouter un paiement",
        "edit_payment_title": "Modifier le paiement",
        "add_expense_title": "Ajouter une dépense",
        "edit_expense_title": "Modifier la dépense",
        "payment_recorded": "Paiement enregistré.",
        "payment_updated": "Paiement mis à jour.",
        "payment_deleted": "Paiement supprimé.",
        "expense_recorded": "Dépense enregistrée.",
        "expense_updated": "Dépense mise à jour.",
        "expense_deleted": "Dépense supprimée.",
        "expense_category_maintenance": "Entretien",
        "expense_category_salaries": "Salaires",
        "expense_category_rent": "Loyer",
        "expense_category_bills": "Factures",
        "expense_category_other": "Autre",
        "revenue_by_month": "Revenus par mois",
        "download_payments_csv": "Télécharger les paiements (CSV)",
        "download_expenses_csv": "Télécharger les dépenses (CSV)",
        "download_schedule_csv": "Télécharger l'emploi du temps (CSV)",
        # Receipt
        "payment_receipt": "Reçu de paiement",
        "school_name": "Nom de l'école",
        "print_date": "Date d'impression",
        "received_from": "Reçu de",
        "amount_of": "La somme de",
        "for_reason": "Pour",
        "on_date": "Le",
        "receipt_footer": "Merci de votre confiance. Ce reçu fait foi de paiement.",
        # Settings
        "school_data": "Données de l'école",
        "school_address": "Adresse de l'école",
        "save_changes": "Enregistrer les modifications",
        "settings_saved": "Paramètres enregistrés.",
        "interface_customization": "Personnalisation de l'interface",
        "language": "Langue",
        "change_password": "Changer le mot de passe",
        "new_password": "Nouveau mot de passe",
        "confirm_new_password": "Confirmer le nouveau mot de passe",
        "update_password": "Mettre à jour le mot de passe",
        "password_updated": "Mot de passe mis à jour.",
        "backup_and_restore": "Sauvegarde",
        "backup_description": "Télécharger une copie JSON de toutes les données de la session.",
        "create_backup_now": "Créer une sauvegarde maintenant",
        # Validation
        "err_name_required": "Le nom est obligatoire.",
        "err_phone_required": "Le téléphone est obligatoire.",
        "err_national_id_required": "Le N° CIN est obligatoire.",
        "err_cost_numeric": "Le coût doit être un nombre.",
        "err_date_invalid": "Date invalide.",
        "err_vehicle_id_integer": "Le N° du véhicule doit être un entier positif.",
        "err_type_required": "Le type est obligatoire.",
        "err_brand_required": "La marque est obligatoire.",
        "err_registration_required": "L'immatriculation est obligatoire.",
        "err_year_integer": "L'année d'achat doit être un entier.",
        "err_lesson_type": "Type de séance invalide.",
        "err_time_slot": "L'heure doit être comprise entre 08:00 et 18:00.",
        "err_student_required": "Veuillez choisir un élève.",
        "err_instructor_required": "Veuillez choisir un moniteur.",
        "err_vehicle_required": "Veuillez choisir un véhicule.",
        "err_topic_required": "Le sujet est obligatoire.",
        "err_location_required": "La salle est obligatoire.",
        "err_amount_numeric": "Le montant doit être un nombre.",
        "err_description_required": "La description est obligatoire.",
        "err_password_short": "Le mot de passe doit contenir au moins 6 caractères.",
        "err_password_mismatch": "Les mots de passe ne correspondent pas.",
    },
}


def t(key: str, lang: str = "ar", **kwargs) -> str:
    """
    Translate `key` into `lang`. Unknown languages fall back to Arabic,
    unknown keys are returned unchanged.
    """
    table = TRANSLATIONS.get(lang, TRANSLATIONS["ar"])
    text = table.get(key, key)
    if kwargs:
        text = text.format(**kwargs)
    return text


def direction(lang: str) -> str:
    return "rtl" if lang == "ar" else "ltr"
