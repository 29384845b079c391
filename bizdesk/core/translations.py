"""Document labels in English, Hebrew and Arabic."""

from typing import Callable

from bizdesk.core.domain_types import Language

_EN = {
    "general_bill": "General Bill",
    "tax_invoice": "Tax Invoice",
    "receipt": "Receipt",
    "tax_invoice_receipt": "Tax Invoice / Receipt",
    "document_info": "Document Information",
    "customer_details": "Customer Details",
    "deal_details": "Deal Details",
    "payment_details": "Payment Details",
    "financial_summary": "Financial Summary",
    "bill_details": "Bill Details",
    "bill_number": "Bill Number",
    "bill_type": "Bill Type",
    "payment_date": "Payment Date",
    "id": "ID",
    "date": "Date",
    "status": "Status",
    "customer_name": "Customer Name",
    "customer_id": "ID Number",
    "phone": "Phone",
    "deal_title": "Deal Title",
    "deal_type": "Deal Type",
    "vehicle": "Vehicle",
    "description": "Description",
    "no_description": "No description",
    "amount": "Amount",
    "total_amount": "Total Amount",
    "payment_method": "Payment Method",
    "paid_amount": "Paid Amount",
    "remaining_amount": "Remaining Amount",
    "not_available": "N/A",
    "status_paid": "Paid",
    "status_pending": "Pending",
    "status_cancelled": "Cancelled",
    "payment_cash": "Cash",
    "payment_bank_transfer": "Bank Transfer",
    "payment_check": "Check",
    "payment_visa": "Visa",
    "payment_other": "Other",
    "car_details": "Car Details",
    "buy_price": "Buy Price",
    "sale_price": "Sale Price",
    "commission": "Commission",
    "loss": "Loss",
    "pre_tax_total": "Total Pre-Tax",
    "tax_amount": "Tax Amount",
    "total_with_tax": "Total with Tax",
    "additional_details": "Additional Details",
    "card_type": "Card Type",
    "last_four_digits": "Last Four Digits",
    "approval_code": "Approval Code",
    "installments": "Installments",
    "bank_name": "Bank Name",
    "branch_name": "Branch Name",
    "account_number": "Account Number",
    "transfer_number": "Transfer Number",
    "account_holder": "Account Holder",
    "check_number": "Check Number",
    "cash_payment": "Cash Payment",
    "recipient_signature": "Recipient Signature",
    "issuer_signature": "Issuer Signature",
    "label": "Item",
    "value": "Value",
}

_HE = {
    "general_bill": "חשבון כללי",
    "tax_invoice": "חשבונית מס",
    "receipt": "קבלה",
    "tax_invoice_receipt": "חשבונית מס / קבלה",
    "document_info": "פרטי המסמך",
    "customer_details": "פרטי הלקוח",
    "deal_details": "פרטי העסקה",
    "payment_details": "פרטי התשלום",
    "financial_summary": "סיכום פיננסי",
    "bill_details": "פרטי החשבון",
    "bill_number": "מספר חשבון",
    "bill_type": "סוג חשבונית",
    "payment_date": "תאריך תשלום",
    "id": "מספר",
    "date": "תאריך",
    "status": "סטטוס",
    "customer_name": "שם הלקוח",
    "customer_id": "ת.ז",
    "phone": "טלפון",
    "deal_title": "כותרת העסקה",
    "deal_type": "סוג העסקה",
    "vehicle": "רכב",
    "description": "תיאור",
    "amount": "סכום",
    "total_amount": 'סה"כ כולל מע"מ',
    "payment_method": "אמצעי תשלום",
    "paid_amount": "שולם",
    "remaining_amount": "יתרה לתשלום",
    "not_available": "לא זמין",
    "status_paid": "שולם",
    "status_pending": "ממתין",
    "status_cancelled": "מבוטל",
    "payment_cash": "מזומן",
    "payment_bank_transfer": "העברה בנקאית",
    "payment_check": "צ'ק",
    "payment_visa": "ויזה",
    "payment_other": "אחר",
    "car_details": "פרטי הרכב",
    "buy_price": "מחיר קנייה",
    "sale_price": "מחיר מכירה",
    "commission": "עמלה",
    "loss": "הפסד",
    "pre_tax_total": 'סה"כ לפני מע"מ',
    "tax_amount": 'סכום מע"מ',
    "total_with_tax": 'סה"כ כולל מע"מ',
    "additional_details": "פרטים נוספים",
    "card_type": "סוג כרטיס",
    "last_four_digits": "ארבע ספרות אחרונות",
    "approval_code": "קוד אישור",
    "installments": "תשלומים",
    "bank_name": "שם בנק",
    "branch_name": "שם סניף",
    "account_number": "מספר חשבון",
    "transfer_number": "מספר העברה",
    "account_holder": "בעל החשבון",
    "check_number": "מספר שיק",
    "cash_payment": "תשלום במזומן",
    "recipient_signature": "חתימת המקבל",
    "issuer_signature": "חתימת המנפיק",
}

_AR = {
    "tax_invoice": "فاتورة ضريبية",
    "receipt": "إيصال",
    "document_info": "معلومات المستند",
    "customer_details": "تفاصيل العميل",
    "deal_details": "تفاصيل الصفقة",
    "payment_details": "تفاصيل الدفع",
    "financial_summary": "ملخص مالي",
    "bill_type": "نوع الفاتورة",
    "payment_date": "تاريخ الدفع",
    "id": "رقم",
    "date": "التاريخ",
    "status": "الحالة",
    "customer_name": "اسم العميل",
    "customer_id": "رقم الهوية",
    "phone": "رقم الهاتف",
    "deal_title": "عنوان الصفقة",
    "deal_type": "نوع الصفقة",
    "vehicle": "المركبة",
    "amount": "المبلغ",
    "total_amount": "الاجمالي شامل الضريبة",
    "payment_method": "طريقة الدفع",
    "paid_amount": "المبلغ المدفوع",
    "remaining_amount": "المبلغ المتبقي",
    "not_available": "غير متوفر",
    "status_paid": "مدفوع",
    "status_pending": "قيد الانتظار",
    "status_cancelled": "ملغي",
    "payment_cash": "نقداً",
    "payment_bank_transfer": "تحويل بنكي",
    "payment_check": "شيك",
    "payment_visa": "فيزا",
    "payment_other": "أخرى",
    "car_details": "تفاصيل السيارة",
    "buy_price": "سعر الشراء",
    "sale_price": "سعر البيع",
    "commission": "العمولة",
    "loss": "خسارة",
    "pre_tax_total": "المجموع قبل الضريبة",
    "tax_amount": "مبلغ الضريبة",
    "total_with_tax": "المجموع مع الضريبة",
    "additional_details": "تفاصيل إضافية",
    "card_type": "نوع البطاقة",
    "last_four_digits": "الأرقام الأربعة الأخيرة",
    "approval_code": "رمز الموافقة",
    "installments": "الأقساط",
    "bank_name": "اسم البنك",
    "branch_name": "اسم الفرع",
    "account_number": "رقم الحساب",
    "transfer_number": "رقم التحويل",
    "account_holder": "صاحب الحساب",
    "check_number": "رقم الشيك",
    "cash_payment": "دفع نقدي",
    "recipient_signature": "توقيع المستلم",
    "issuer_signature": "توقيع المصدر",
}

TRANSLATIONS: dict[Language, dict[str, str]] = {
    Language.EN: _EN,
    Language.HE: _HE,
    Language.AR: _AR,
}


def translator(language: Language | str = Language.HE) -> Callable[[str], str]:
    """Label lookup for language; missing labels fall back to English, then to the key."""
    table = TRANSLATIONS.get(Language(language), _EN)

    def t(key: str) -> str:
        return table.get(key) or _EN.get(key) or key

    return t
